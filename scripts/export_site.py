"""Export the blog as static JSON files.

Usage:
    python -m scripts.export_site OUTPUT_DIR
    FOLIO_POSTS_DIR=content/posts python -m scripts.export_site dist/

Writes index.json (all posts, newest first), stats.json, archive.json,
and posts/<id>.json (rendered post plus related posts) under OUTPUT_DIR.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

from folio.models.post import PostDetail
from folio.services.aggregates import build_archive, compute_stats, find_related
from folio.services.posts import load_all_posts, render_post

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("scripts.export_site")


def _write_json(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


async def export_site(output_dir: Path) -> int:
    """Write every JSON file; returns the number of posts exported."""
    posts = await load_all_posts()

    _write_json(output_dir / "index.json", [p.model_dump(mode="json") for p in posts])
    _write_json(output_dir / "stats.json", compute_stats(posts).model_dump(mode="json"))
    _write_json(
        output_dir / "archive.json",
        {
            year: {
                month: [p.model_dump(mode="json") for p in month_posts]
                for month, month_posts in months.items()
            }
            for year, months in build_archive(posts).items()
        },
    )

    for summary in posts:
        post = await render_post(summary.id)
        detail = PostDetail(post=post, related=find_related(post.id, post.tags, posts))
        _write_json(output_dir / "posts" / f"{post.id}.json", detail.model_dump(mode="json"))

    return len(posts)


async def main() -> int:
    if len(sys.argv) != 2:
        print(__doc__)
        return 2

    output_dir = Path(sys.argv[1])
    print(f"Exporting posts to {output_dir}...")
    count = await export_site(output_dir)
    if count == 0:
        logger.warning("No posts found — check FOLIO_POSTS_DIR")
        return 1

    print(f"\nExport complete: {count} posts")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
