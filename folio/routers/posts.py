"""Blog post endpoints: home feed, post detail, rendered content."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from folio.config import get_settings
from folio.models.post import PostDetail, PostListPage, SortOrder
from folio.services.aggregates import find_related
from folio.services.pages import render_post_page
from folio.services.post_list import ListState, derive_list
from folio.services.posts import (
    PostNotFoundError,
    list_all_ids,
    load_all_posts,
    render_post,
)
from folio.services.theme import Theme, current_theme

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


async def _render_or_404(post_id: str):
    try:
        return await render_post(post_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Post not found") from exc


@router.get("", response_model=PostListPage)
async def list_posts(
    search: str = Query(default="", max_length=200),
    tag: list[str] = Query(
        default=[],
        description="Only posts carrying every given tag (repeatable)",
    ),
    sort: SortOrder = Query(default=SortOrder.NEWEST_FIRST),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(
        default=None,
        description="Posts per page: 5, 10 or 20",
    ),
):
    """Get one page of the home feed, filtered and sorted."""
    try:
        state = ListState(
            search=search,
            sort_order=sort,
            selected_tags=tuple(dict.fromkeys(tag)),
            page=page,
            page_size=(
                page_size
                if page_size is not None
                else get_settings().default_page_size
            ),
        )
    except ValidationError as exc:
        raise HTTPException(
            status_code=422, detail="page_size must be one of 5, 10, 20"
        ) from exc

    posts = await load_all_posts()
    return derive_list(posts, state)


@router.get("/ids")
async def list_post_ids():
    """Get the id of every post."""
    return {"ids": list_all_ids()}


@router.get("/{post_id}/content")
async def get_post_content(
    post_id: str = Path(..., max_length=200),
):
    """Serve the rendered markdown body of a post as HTML."""
    post = await _render_or_404(post_id)
    return HTMLResponse(content=post.content_html or "")


@router.get("/{post_id}/page")
async def get_post_page(
    post_id: str = Path(..., max_length=200),
    theme: Theme = Depends(current_theme),
):
    """Serve the full post detail page, with related posts."""
    post = await _render_or_404(post_id)
    related = find_related(post.id, post.tags, await load_all_posts())
    page = render_post_page(post, related, theme, get_settings().site_title)
    return HTMLResponse(content=page)


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: str = Path(..., max_length=200),
):
    """Get a rendered post and up to three related posts."""
    post = await _render_or_404(post_id)
    related = find_related(post.id, post.tags, await load_all_posts())
    logger.debug("Post %s has %d related posts", post.id, len(related))
    return PostDetail(post=post, related=related)
