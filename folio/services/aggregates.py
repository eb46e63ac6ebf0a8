"""Read-only aggregations over the loaded post list.

Tag statistics, year/month archive buckets, and related-post ranking.
All functions expect the list in loader order (newest first) and never
modify it.
"""

from folio.models.post import Archive, BlogStats, PostData

POPULAR_TAG_COUNT = 5
RELATED_POST_LIMIT = 3


def tag_counts(posts: list[PostData]) -> dict[str, int]:
    """Count tag occurrences across posts, in first-seen order."""
    counts: dict[str, int] = {}
    for post in posts:
        for tag in post.tags:
            counts[tag] = counts.get(tag, 0) + 1
    return counts


def compute_stats(posts: list[PostData]) -> BlogStats:
    """Compute total posts, tag distribution and the most used tags.

    Popular tags are the top five by count; ties keep first-seen order.
    """
    distribution = tag_counts(posts)
    popular = sorted(distribution, key=lambda tag: distribution[tag], reverse=True)
    return BlogStats(
        total_posts=len(posts),
        tag_distribution=distribution,
        popular_tags=popular[:POPULAR_TAG_COUNT],
    )


def build_archive(posts: list[PostData]) -> Archive:
    """Bucket posts by year and month of their ``YYYY-MM-DD`` date.

    Dates that fell back to a raw, non-ISO string land under whatever keys
    the split produces.
    """
    archive: Archive = {}
    for post in posts:
        parts = post.date.split("-")
        year = parts[0]
        month = parts[1] if len(parts) > 1 else ""
        archive.setdefault(year, {}).setdefault(month, []).append(post)
    return archive


def find_related(
    current_id: str,
    tags: list[str],
    all_posts: list[PostData],
    limit: int = RELATED_POST_LIMIT,
) -> list[PostData]:
    """Rank other posts by how many tags they share with ``tags``.

    Score is the size of the tag set intersection. Posts sharing nothing
    are dropped; equal scores keep the input (date) order.
    """
    wanted = set(tags)
    if not wanted:
        return []

    scored: list[tuple[int, PostData]] = []
    for post in all_posts:
        if post.id == current_id:
            continue
        score = len(wanted.intersection(post.tags))
        if score > 0:
            scored.append((score, post))

    scored.sort(key=lambda item: item[0], reverse=True)
    return [post for _score, post in scored[:limit]]
