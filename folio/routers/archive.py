"""Blog statistics and archive endpoints."""

from fastapi import APIRouter, Query

from folio.models.post import BlogStats
from folio.services.aggregates import build_archive, compute_stats
from folio.services.archive_view import layout_archive
from folio.services.posts import load_all_posts

router = APIRouter(tags=["archive"])


@router.get("/stats", response_model=BlogStats)
async def blog_stats():
    """Get post count, tag distribution and popular tags."""
    return compute_stats(await load_all_posts())


@router.get("/archive")
async def archive(
    expanded: list[str] = Query(
        default=[],
        description="Years to show expanded (repeatable)",
    ),
):
    """Get posts grouped by year and month, newest first."""
    posts = await load_all_posts()
    years = layout_archive(build_archive(posts), expanded)
    return {"years": years, "total": len(posts)}
