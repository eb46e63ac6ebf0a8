"""Shared fixtures for folio tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset the cached settings between tests."""
    from folio.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def posts_dir(tmp_path, monkeypatch) -> Path:
    """An empty content store wired into the settings via FOLIO_POSTS_DIR."""
    directory = tmp_path / "posts"
    directory.mkdir()
    monkeypatch.setenv("FOLIO_POSTS_DIR", str(directory))
    monkeypatch.setenv("FOLIO_DEFAULT_THEME", "light")

    from folio.config import get_settings

    get_settings.cache_clear()
    return directory


@pytest.fixture
def write_post(posts_dir):
    """Write ``<post_id>.md`` with a front-matter header and return its path."""

    def _write(
        post_id: str,
        title: str | None = None,
        date: str | None = None,
        tags: str | None = None,
        body: str = "Post body.",
    ) -> Path:
        header = []
        if title is not None:
            header.append(f"title: {title}")
        if date is not None:
            header.append(f"date: {date}")
        if tags is not None:
            header.append(f"tags: {tags}")
        text = "---\n" + "\n".join(header) + "\n---\n" + body + "\n"
        path = posts_dir / f"{post_id}.md"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_corpus(write_post):
    """Five posts over three months with overlapping tags."""
    write_post(
        "hello-world",
        title="Hello World",
        date="2023-11-05",
        tags="[intro, go]",
        body="Welcome to the blog.\n\nMore text here.",
    )
    write_post(
        "go-channels",
        title="Go Channels",
        date="2023-11-20",
        tags="go, concurrency",
        body="# Channels\n\nChannels are **typed** pipes.",
    )
    write_post(
        "rust-ownership",
        title="Rust Ownership",
        date="2024-01-01",
        tags="[rust, memory]",
        body="Ownership rules in Rust.",
    )
    write_post(
        "go-and-rust",
        title="Go and Rust",
        date="2024-01-15",
        tags="[go, rust, concurrency]",
        body="Comparing two languages.",
    )
    write_post(
        "notes",
        title="Notes",
        date="2024-02-01",
        body="Untagged notes.",
    )
