"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment (``FOLIO_*``)."""

    # App
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Site
    site_title: str = "Folio"
    site_url: str = "http://localhost:8000"
    default_theme: str = "light"

    # Content store: one markdown document per post
    posts_dir: str = "posts"

    # List view
    default_page_size: int = 5

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    model_config = {"env_file": ".env", "env_prefix": "FOLIO_", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
