"""Post loader and renderer over the markdown content store.

Each post is one ``<id>.md`` file: a YAML front-matter header (``title``,
``date``, ``tags``) followed by a markdown body. Everything is re-read on
every call; there is no cache in front of the directory.
"""

import asyncio
import logging
import re
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

import frontmatter
import markdown

from folio.config import get_settings
from folio.models.post import PostData

logger = logging.getLogger(__name__)

POST_SUFFIX = ".md"

MD_EXTENSIONS = [
    "fenced_code",
    "tables",
    "toc",
]

_UNSAFE_ID_CHARS = ("/", "\\", "\x00")
_TAG_SPLIT_RE = re.compile(r"[,\s]+")

# Textual forms accepted after ISO parsing fails
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


class PostNotFoundError(LookupError):
    """No document in the content store matches the requested post id."""

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post not found: {post_id!r}")
        self.post_id = post_id


def validate_post_id(post_id: str) -> str:
    """Validate a user-supplied post id.

    Any file stem is a valid id, spaces and non-ASCII letters included, as
    long as it names a file directly inside the posts directory: ids
    containing slashes, backslashes or NUL, and the bare ``.`` and ``..``
    ids, are rejected. Returns the id unchanged if valid; raises ValueError
    otherwise.
    """
    if post_id in ("", ".", "..") or any(c in post_id for c in _UNSAFE_ID_CHARS):
        raise ValueError(f"Invalid post id: {post_id!r}")
    return post_id


def _posts_dir() -> Path:
    return Path(get_settings().posts_dir)


def format_date(value: Any) -> str:
    """Normalize a front-matter date to ``YYYY-MM-DD``.

    YAML hands unquoted dates over as ``date``/``datetime`` objects; strings
    are tried as ISO first, then a few common textual forms. Timezone-aware
    values are converted to UTC before the day is taken. Anything that
    doesn't parse comes back unchanged.
    """
    if value is None:
        return ""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    raw = str(value)
    text = raw.strip()
    try:
        return format_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue

    logger.debug("Unparseable date %r, keeping raw value", raw)
    return raw


def format_tags(value: Any) -> list[str]:
    """Normalize front-matter tags to an ordered list of non-empty strings.

    Accepts a YAML list or a single string separated by commas and/or
    whitespace. Case and duplicates are preserved.
    """
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items = [str(tag).strip() for tag in value if tag is not None]
    else:
        items = [tag.strip() for tag in _TAG_SPLIT_RE.split(str(value))]
    return [tag for tag in items if tag]


def make_excerpt(body: str) -> str:
    """First line of the body, trimmed and lowercased."""
    text = body.strip()
    if not text:
        return ""
    return text.splitlines()[0].strip().lower()


def parse_post(post_id: str, raw: str, render: bool = False) -> PostData:
    """Parse one document's text into a post record.

    With ``render`` the markdown body is converted to HTML. The HTML is not
    sanitized: post authors are trusted.
    """
    doc = frontmatter.loads(raw)
    meta = doc.metadata

    content_html = None
    if render:
        content_html = markdown.markdown(
            doc.content, extensions=MD_EXTENSIONS, output_format="html"
        )

    return PostData(
        id=post_id,
        title=str(meta.get("title") or ""),
        date=format_date(meta.get("date")),
        excerpt=make_excerpt(doc.content),
        tags=format_tags(meta.get("tags")),
        content_html=content_html,
    )


def sort_posts(posts: list[PostData]) -> list[PostData]:
    """Newest first; posts sharing a date are ordered by id."""
    by_id = sorted(posts, key=lambda p: p.id)
    return sorted(by_id, key=lambda p: p.date, reverse=True)


def list_all_ids() -> list[str]:
    """Return the id of every post document, sorted by name."""
    posts_dir = _posts_dir()
    if not posts_dir.is_dir():
        logger.warning("Posts directory not found at %s", posts_dir)
        return []
    return sorted(
        path.stem
        for path in posts_dir.iterdir()
        if path.suffix == POST_SUFFIX and path.is_file()
    )


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


async def _load_post(posts_dir: Path, post_id: str) -> PostData:
    path = posts_dir / f"{post_id}{POST_SUFFIX}"
    try:
        raw = await asyncio.to_thread(_read_text, path)
        return parse_post(post_id, raw)
    except Exception:
        logger.error("Failed to load post document %s", path.name)
        raise


async def load_all_posts() -> list[PostData]:
    """Load every post (without rendered HTML), newest first.

    Documents are read concurrently. A single unreadable or malformed
    document aborts the whole load.
    """
    posts_dir = _posts_dir()
    ids = list_all_ids()
    posts = await asyncio.gather(*(_load_post(posts_dir, post_id) for post_id in ids))
    logger.debug("Loaded %d posts from %s", len(posts), posts_dir)
    return sort_posts(list(posts))


async def render_post(post_id: str) -> PostData:
    """Load a single post and render its body to HTML.

    Raises PostNotFoundError if the id is invalid or has no document.
    """
    try:
        validate_post_id(post_id)
    except ValueError as exc:
        raise PostNotFoundError(post_id) from exc

    path = _posts_dir() / f"{post_id}{POST_SUFFIX}"
    if not path.is_file():
        raise PostNotFoundError(post_id)
    try:
        raw = await asyncio.to_thread(_read_text, path)
    except (FileNotFoundError, IsADirectoryError) as exc:
        raise PostNotFoundError(post_id) from exc
    return parse_post(post_id, raw, render=True)
