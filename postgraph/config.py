"""Application configuration via environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
        "https://blog.jell.kr",
    ]

    # Content
    content_root: Path = Path("_posts")
    render_html: bool = True
    max_concurrent_reads: int = 32

    # Site metadata (keywords fallback, RSS channel)
    site_title: str = "Jell의 세상 사는 이야기"
    site_author: str = "Jell"
    site_description: str = "이것 저것 해보는 블로그입니다."
    site_url: str = "https://blog.jell.kr"
    feed_size: int = 10

    # Protects POST /api/content/posts/reindex
    reindex_api_key: str = ""

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
