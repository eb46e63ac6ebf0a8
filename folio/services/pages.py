"""Server-rendered HTML for the post detail page."""

import html

from folio.models.post import PostData
from folio.services.theme import Theme


def _tag_list(tags: list[str]) -> str:
    if not tags:
        return ""
    items = "".join(f'<span class="tag">{html.escape(tag)}</span>' for tag in tags)
    return f'<div class="tags">{items}</div>'


def _related_panel(related: list[PostData]) -> str:
    if not related:
        return ""
    cards = "\n".join(
        f'<a class="related-post" href="/posts/{html.escape(p.id)}">'
        f"<h3>{html.escape(p.title)}</h3>"
        f'<time datetime="{html.escape(p.date)}">{html.escape(p.date)}</time>'
        f"{_tag_list(p.tags)}</a>"
        for p in related
    )
    return f"""<aside class="related">
<h2>You may also like</h2>
{cards}
</aside>"""


def render_post_page(
    post: PostData, related: list[PostData], theme: Theme, site_title: str
) -> str:
    """Build the full detail page for a rendered post.

    ``post.content_html`` is inserted as-is; everything else is escaped.
    """
    title_esc = html.escape(post.title)
    site_esc = html.escape(site_title)
    date_esc = html.escape(post.date)
    desc_esc = html.escape(post.excerpt)

    return f"""<!DOCTYPE html>
<html lang="en" data-theme="{theme.value}">
<head>
<meta charset="utf-8" />
<title>{title_esc} — {site_esc}</title>
<meta name="description" content="{desc_esc}" />
<meta property="og:type" content="article" />
<meta property="og:title" content="{title_esc}" />
<meta property="og:description" content="{desc_esc}" />
<meta property="article:published_time" content="{date_esc}" />
</head>
<body class="theme-{theme.value}">
<a class="back" href="/">Back to home</a>
<article>
<header>
<h1>{title_esc}</h1>
<time datetime="{date_esc}">{date_esc}</time>
{_tag_list(post.tags)}
</header>
<div class="prose">
{post.content_html or ""}
</div>
</article>
{_related_panel(related)}
</body>
</html>"""
