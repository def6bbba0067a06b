"""
postgraph API

Serves the blog's content index: posts, tags, series, search, RSS and post images.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from postgraph.config import get_settings
from postgraph.middleware import (
    RequestIDLogFilter,
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
)
from postgraph.routers import discovery, images, posts, tags
from postgraph.services.ingestion.loader import load_content_index

logger = logging.getLogger(__name__)

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
)
for _handler in logging.getLogger().handlers:
    _handler.addFilter(RequestIDLogFilter())

API_PREFIX = "/api/content"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build the content index before serving."""
    index, stats = await load_content_index(get_settings())
    app.state.content_index = index
    app.state.load_stats = stats
    yield


app = FastAPI(
    title="postgraph API",
    description="Markdown post index for the blog",
    version="0.1.0",
    lifespan=lifespan,
)

# Request ID and security headers
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIDMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "X-Reindex-Key", "X-Request-ID"],
)

# Routers
app.include_router(posts.router, prefix=API_PREFIX)
app.include_router(tags.router, prefix=API_PREFIX)
app.include_router(discovery.router, prefix=API_PREFIX)
app.include_router(images.router)


def _run_health_checks(request: Request) -> dict[str, Any]:
    """Report whether the index is built and how many posts it holds."""
    index = getattr(request.app.state, "content_index", None)
    stats = getattr(request.app.state, "load_stats", None)

    checks = {"index": "ok" if index is not None else "fail"}
    if index is not None and len(index) == 0:
        logger.warning("Health check: content index is empty")

    result: dict[str, Any] = {
        "status": "ok" if index is not None else "unavailable",
        "service": "postgraph-api",
        "version": "0.1.0",
        "checks": checks,
        "posts": len(index) if index is not None else 0,
    }
    if stats is not None:
        result["skipped"] = stats.skipped
    return result


@app.get(f"{API_PREFIX}/health")
async def health_check(request: Request) -> JSONResponse:
    """Health check reporting index state."""
    result = _run_health_checks(request)
    status_code = 200 if result["status"] == "ok" else 503
    return JSONResponse(content=result, status_code=status_code)
