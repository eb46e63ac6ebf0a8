"""Tests for the post endpoints.

Covers the home feed (search, tags, sort, paging), post detail with related
posts, rendered content, and the HTML detail page. Runs against a real
markdown corpus in a temp directory.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient


@pytest.fixture
async def client(posts_dir):
    from folio.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


async def test_list_posts_newest_first(sample_corpus, client):
    response = await client.get("/api/folio/posts")

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 5
    assert data["page"] == 1
    assert data["page_size"] == 5
    assert [p["id"] for p in data["posts"]] == [
        "notes",
        "go-and-rust",
        "rust-ownership",
        "go-channels",
        "hello-world",
    ]
    assert data["posts"][0]["content_html"] is None
    assert data["tag_counts"]["go"] == 3


async def test_list_posts_tag_filter_is_and(sample_corpus, client):
    response = await client.get("/api/folio/posts", params={"tag": ["go", "rust"]})

    data = response.json()
    assert [p["id"] for p in data["posts"]] == ["go-and-rust"]
    assert data["selected_tags"] == ["go", "rust"]


async def test_list_posts_search_and_sort(sample_corpus, client):
    response = await client.get(
        "/api/folio/posts", params={"search": "GO", "sort": "asc"}
    )

    data = response.json()
    assert [p["id"] for p in data["posts"]] == [
        "hello-world",
        "go-channels",
        "go-and-rust",
    ]
    assert data["sort_order"] == "asc"


async def test_list_posts_paging(sample_corpus, client):
    # default page size 5 holds everything, so only one page exists
    response = await client.get("/api/folio/posts", params={"page": 3})

    data = response.json()
    assert data["total_pages"] == 1
    assert data["page"] == 1
    assert data["page_links"] == [1]


async def test_list_posts_rejects_unknown_page_size(sample_corpus, client):
    response = await client.get("/api/folio/posts", params={"page_size": 7})

    assert response.status_code == 422


async def test_list_posts_rejects_zero_page_size(sample_corpus, client):
    response = await client.get("/api/folio/posts", params={"page_size": 0})

    assert response.status_code == 422


async def test_list_posts_empty_store(client):
    response = await client.get("/api/folio/posts")

    data = response.json()
    assert data["posts"] == []
    assert data["total"] == 0


async def test_list_post_ids(sample_corpus, client):
    response = await client.get("/api/folio/posts/ids")

    assert response.status_code == 200
    assert "go-channels" in response.json()["ids"]
    assert len(response.json()["ids"]) == 5


async def test_get_post_with_related(sample_corpus, client):
    response = await client.get("/api/folio/posts/go-and-rust")

    assert response.status_code == 200
    data = response.json()
    assert data["post"]["title"] == "Go and Rust"
    assert data["post"]["tags"] == ["go", "rust", "concurrency"]
    assert "<p>Comparing two languages.</p>" in data["post"]["content_html"]
    # go-channels shares go + concurrency; the other two share one tag each
    assert [p["id"] for p in data["related"]] == [
        "go-channels",
        "rust-ownership",
        "hello-world",
    ]


async def test_get_post_without_tags_has_no_related(sample_corpus, client):
    response = await client.get("/api/folio/posts/notes")

    assert response.status_code == 200
    assert response.json()["related"] == []


async def test_get_post_not_found(sample_corpus, client):
    response = await client.get("/api/folio/posts/nonexistent")

    assert response.status_code == 404
    assert "not found" in response.json()["detail"].lower()


async def test_get_post_unsafe_id_is_not_found(sample_corpus, client):
    response = await client.get("/api/folio/posts/..%5Cposts%5Cnotes")

    assert response.status_code == 404


async def test_get_post_with_space_and_underscore_in_id(write_post, client):
    write_post("_draft notes", title="Draft", tags="go", body="Draft body.")

    ids = (await client.get("/api/folio/posts/ids")).json()["ids"]
    response = await client.get("/api/folio/posts/_draft%20notes")

    assert ids == ["_draft notes"]
    assert response.status_code == 200
    assert response.json()["post"]["id"] == "_draft notes"
    assert "<p>Draft body.</p>" in response.json()["post"]["content_html"]


async def test_get_post_directory_is_not_found(posts_dir, client):
    (posts_dir / "folder.md").mkdir()

    response = await client.get("/api/folio/posts/folder")

    assert response.status_code == 404


async def test_get_post_content_serves_html(sample_corpus, client):
    response = await client.get("/api/folio/posts/go-channels/content")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "<strong>typed</strong>" in response.text


async def test_get_post_content_not_found(client):
    response = await client.get("/api/folio/posts/missing/content")

    assert response.status_code == 404


async def test_get_post_page(sample_corpus, client):
    response = await client.get(
        "/api/folio/posts/go-channels/page", headers={"Cookie": "theme=dark"}
    )

    assert response.status_code == 200
    page = response.text
    assert '<body class="theme-dark">' in page
    assert "<h1>Go Channels</h1>" in page
    assert "<strong>typed</strong>" in page
    assert 'href="/posts/go-and-rust"' in page


async def test_get_post_page_escapes_metadata(write_post, client):
    write_post("xss", title='"<script>alert(1)</script>"', body="Body")

    response = await client.get("/api/folio/posts/xss/page")

    assert response.status_code == 200
    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;" in response.text


async def test_load_failure_propagates(client, mocker):
    mocker.patch(
        "folio.routers.posts.load_all_posts",
        new_callable=AsyncMock,
        side_effect=OSError("disk gone"),
    )

    with pytest.raises(OSError):
        await client.get("/api/folio/posts")
