"""Tests for middleware: security headers, request IDs and CORS."""

import logging

from httpx import ASGITransport, AsyncClient

from postgraph.middleware import RequestIDLogFilter, request_id_var


def _client(app):
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


async def test_security_headers_present(mock_settings):
    """Every response includes security headers."""
    from postgraph.main import app

    async with _client(app) as client:
        response = await client.get("/api/content/health")

    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"


async def test_request_id_echoed(mock_settings):
    from postgraph.main import app

    async with _client(app) as client:
        given = await client.get("/api/content/health", headers={"X-Request-ID": "abc123"})
        generated = await client.get("/api/content/health")

    assert given.headers["X-Request-ID"] == "abc123"
    assert len(generated.headers["X-Request-ID"]) == 36


def test_log_filter_adds_request_id():
    record = logging.LogRecord("postgraph", logging.INFO, __file__, 1, "hi", None, None)
    token = request_id_var.set("req-1")
    try:
        RequestIDLogFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-1"

    RequestIDLogFilter().filter(record)
    assert record.request_id == "-"


async def test_cors_allows_explicit_methods(mock_settings):
    """CORS preflight returns explicit methods, not wildcard."""
    from postgraph.main import app

    async with _client(app) as client:
        response = await client.options(
            "/api/content/posts/reindex",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "X-Reindex-Key",
            },
        )

    allowed = response.headers.get("Access-Control-Allow-Methods", "")
    assert "GET" in allowed
    assert "POST" in allowed
    assert allowed != "*"
    assert "x-reindex-key" in response.headers.get("Access-Control-Allow-Headers", "").lower()
