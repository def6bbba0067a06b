"""Shared fixtures for postgraph tests."""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset module-level caches and app state between tests."""
    yield

    from postgraph.config import get_settings

    get_settings.cache_clear()

    from postgraph.main import app

    app.dependency_overrides.clear()
    app.state.content_index = None
    app.state.load_stats = None


@pytest.fixture
def posts_root(tmp_path) -> Path:
    root = tmp_path / "_posts"
    root.mkdir()
    return root


@pytest.fixture
def write_post(posts_root):
    """Write a markdown file under the content root and return its path."""

    def _write(relative_path: str, text: str) -> Path:
        path = posts_root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def mock_settings(monkeypatch, posts_root):
    """Provide a Settings object with safe test defaults."""
    from postgraph.config import Settings, get_settings

    test_settings = Settings(
        content_root=posts_root,
        render_html=True,
        max_concurrent_reads=4,
        site_title="Test Blog",
        site_author="Tester",
        site_description="A blog for tests",
        site_url="https://blog.example.com",
        feed_size=10,
        reindex_api_key="test-reindex-key",
    )

    get_settings.cache_clear()
    monkeypatch.setattr("postgraph.config.get_settings", lambda: test_settings)

    # Modules that did `from postgraph.config import get_settings` hold their
    # own binding, which the patch above does not reach
    for mod_path in [
        "postgraph.main",
        "postgraph.routers.posts",
        "postgraph.routers.discovery",
        "postgraph.routers.images",
        "postgraph.services.ingestion.loader",
        "scripts.build_index",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings
