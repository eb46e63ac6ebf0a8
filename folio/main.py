"""
Folio API

Thin FastAPI backend serving a flat-file markdown blog.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from folio.config import get_settings
from folio.logging_config import configure_logging
from folio.middleware import RequestIDMiddleware, SecurityHeadersMiddleware
from folio.routers import archive, posts, theme
from folio.services.post_list import PAGE_SIZE_OPTIONS
from folio.services.posts import list_all_ids

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    logger.info("Serving posts from %s", Path(get_settings().posts_dir).resolve())
    yield


app = FastAPI(
    title="Folio API",
    description="Markdown blog: home feed, post detail and archive",
    version="0.1.0",
    lifespan=lifespan,
)

# Security headers, then request ID around it
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Routers
app.include_router(posts.router, prefix="/api/folio")
app.include_router(archive.router, prefix="/api/folio")
app.include_router(theme.router, prefix="/api/folio")


def _check_config() -> str:
    """Verify required configuration is loaded. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.posts_dir and s.default_page_size in PAGE_SIZE_OPTIONS:
        return "ok"
    return "fail"


def _check_content() -> str:
    """Verify the posts directory exists and holds at least one post."""
    if not Path(get_settings().posts_dir).is_dir():
        return "fail"
    return "ok" if list_all_ids() else "empty"


def _run_health_checks() -> dict[str, Any]:
    """Run all health checks, returning the full response body."""
    checks = {"config": _check_config(), "content": _check_content()}
    failed = [k for k, v in checks.items() if v == "fail"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "folio-api",
        "version": "0.1.0",
        "checks": checks,
    }


@app.get("/api/folio/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration and the content store."""
    result = _run_health_checks()
    return JSONResponse(content=result, status_code=200)
