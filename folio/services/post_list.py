"""Home feed list view: search, tag filter, sort and pagination.

The view is a pure reducer. ``ListState`` holds what the reader picked and
every transition returns a new state; ``derive_list`` recomputes the whole
filter -> sort -> page pipeline from the full post list each time.
"""

import math

from pydantic import BaseModel, ConfigDict, field_validator

from folio.models.post import PostData, PostListPage, SortOrder
from folio.services.aggregates import tag_counts

PAGE_SIZE_OPTIONS = (5, 10, 20)


class ListState(BaseModel):
    """Reader-controlled list view state."""

    model_config = ConfigDict(frozen=True)

    search: str = ""
    sort_order: SortOrder = SortOrder.NEWEST_FIRST
    selected_tags: tuple[str, ...] = ()
    page: int = 1
    page_size: int = PAGE_SIZE_OPTIONS[0]

    @field_validator("page_size")
    @classmethod
    def _check_page_size(cls, value: int) -> int:
        if value not in PAGE_SIZE_OPTIONS:
            raise ValueError(f"page_size must be one of {PAGE_SIZE_OPTIONS}")
        return value


def set_search(state: ListState, search: str) -> ListState:
    return state.model_copy(update={"search": search})


def set_sort_order(state: ListState, sort_order: SortOrder) -> ListState:
    return state.model_copy(update={"sort_order": SortOrder(sort_order)})


def toggle_tag(state: ListState, tag: str) -> ListState:
    """Select ``tag`` if it isn't selected yet, otherwise deselect it."""
    if tag in state.selected_tags:
        selected = tuple(t for t in state.selected_tags if t != tag)
    else:
        selected = (*state.selected_tags, tag)
    return state.model_copy(update={"selected_tags": selected})


def clear_tags(state: ListState) -> ListState:
    return state.model_copy(update={"selected_tags": ()})


def go_to_page(state: ListState, page: int) -> ListState:
    return state.model_copy(update={"page": page})


def set_page_size(state: ListState, page_size: int) -> ListState:
    """Change the page size and go back to the first page."""
    # model_copy skips validation, so re-validate through the constructor
    return ListState(**{**state.model_dump(), "page_size": page_size, "page": 1})


def matches_search(post: PostData, search: str) -> bool:
    """Case-insensitive substring match on title, excerpt or any tag."""
    if search.strip() == "":
        return True
    needle = search.lower()
    return (
        needle in post.title.lower()
        or needle in post.excerpt.lower()
        or any(needle in tag.lower() for tag in post.tags)
    )


def matches_tags(post: PostData, selected_tags: tuple[str, ...]) -> bool:
    """True when the post carries every selected tag."""
    return all(tag in post.tags for tag in selected_tags)


def filter_posts(posts: list[PostData], state: ListState) -> list[PostData]:
    return [
        post
        for post in posts
        if matches_search(post, state.search)
        and matches_tags(post, state.selected_tags)
    ]


def sort_by_date(posts: list[PostData], sort_order: SortOrder) -> list[PostData]:
    return sorted(
        posts,
        key=lambda p: p.date,
        reverse=sort_order == SortOrder.NEWEST_FIRST,
    )


def page_links(current: int, total_pages: int) -> list[int | None]:
    """Page numbers for the pager, with ``None`` marking an ellipsis.

    Shows the first and last page plus the neighbours of the current one.
    """
    links: list[int | None] = []
    for page in range(1, total_pages + 1):
        if page in (1, total_pages) or abs(current - page) <= 1:
            links.append(page)
        elif (page == 2 and current > 3) or (
            page == total_pages - 1 and current < total_pages - 2
        ):
            links.append(None)
    return links


def derive_list(posts: list[PostData], state: ListState) -> PostListPage:
    """Filter, sort and slice ``posts`` for the given state.

    A page past the end (e.g. after a filter shrank the result) is clamped
    to the last page; an empty result is page 1 of 0.
    """
    visible = sort_by_date(filter_posts(posts, state), state.sort_order)

    total = len(visible)
    total_pages = math.ceil(total / state.page_size)
    page = min(max(state.page, 1), max(total_pages, 1))
    start = (page - 1) * state.page_size

    return PostListPage(
        posts=visible[start : start + state.page_size],
        total=total,
        page=page,
        page_size=state.page_size,
        total_pages=total_pages,
        page_links=page_links(page, total_pages),
        search=state.search,
        sort_order=state.sort_order,
        selected_tags=list(state.selected_tags),
        tag_counts=tag_counts(posts),
    )
