"""Blog post data models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PostData(BaseModel):
    """A post record as parsed from one markdown document.

    ``content_html`` is only set when the post was rendered individually;
    list views carry the lightweight record.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    date: str = ""
    excerpt: str = ""
    tags: list[str] = []
    content_html: str | None = None


# year -> month -> posts, both keys zero-padded strings
Archive = dict[str, dict[str, list[PostData]]]


class PostDetail(BaseModel):
    """A rendered post plus its related-posts panel."""

    post: PostData
    related: list[PostData] = []


class BlogStats(BaseModel):
    """Corpus-wide tag statistics."""

    total_posts: int
    tag_distribution: dict[str, int]
    popular_tags: list[str]


class SortOrder(str, Enum):
    NEWEST_FIRST = "desc"
    OLDEST_FIRST = "asc"


class PostListPage(BaseModel):
    """One page of the filtered, sorted post list."""

    posts: list[PostData]
    total: int
    page: int
    page_size: int
    total_pages: int
    page_links: list[int | None]
    search: str = ""
    sort_order: SortOrder = SortOrder.NEWEST_FIRST
    selected_tags: list[str] = []
    tag_counts: dict[str, int] = {}


class ArchiveMonth(BaseModel):
    month: str
    name: str
    posts: list[PostData]


class ArchiveYear(BaseModel):
    """A year in the archive view; ``months`` is empty while collapsed."""

    year: str
    expanded: bool = False
    post_count: int = Field(0, ge=0)
    months: list[ArchiveMonth] = []
