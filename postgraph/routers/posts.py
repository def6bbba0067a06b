"""Post endpoints."""

import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request

from postgraph.config import get_settings
from postgraph.dependencies import get_content_index
from postgraph.errors import ContentRootError, DuplicateSlugError
from postgraph.models.post import PostDetail, PostIndex, PostSummary
from postgraph.services.content_index import ContentIndex
from postgraph.services.ingestion.loader import load_content_index
from postgraph.services.related import get_related_posts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=PostIndex)
async def list_posts(
    category: str | None = Query(
        default=None,
        description="Only posts in this category",
    ),
    limit: int = Query(
        default=50,
        ge=1,
        le=500,
        description="Maximum number of posts to return",
    ),
    offset: int = Query(
        default=0,
        ge=0,
        description="Number of posts to skip",
    ),
    index: ContentIndex = Depends(get_content_index),
):
    """Get all posts, newest first, optionally filtered by category."""
    if category:
        posts = index.get_posts_by_category(category)
    else:
        posts = index.get_all_posts()
    page = posts[offset : offset + limit]
    return PostIndex(posts=[PostSummary.from_post(p) for p in page], total=len(posts))


@router.post("/reindex")
async def reindex_posts(request: Request, x_reindex_key: str = Header()):
    """Rescan the content root and replace the index. Protected by API key."""
    settings = get_settings()
    if not settings.reindex_api_key or x_reindex_key != settings.reindex_api_key:
        raise HTTPException(status_code=403, detail="Invalid reindex key")

    try:
        index, stats = await load_content_index(settings)
    except (ContentRootError, DuplicateSlugError) as e:
        logger.error("Reindex failed, keeping previous index: %s", e)
        raise HTTPException(status_code=500, detail=str(e)) from e

    request.app.state.content_index = index
    request.app.state.load_stats = stats
    return stats.to_dict()


@router.get("/{slug:path}", response_model=PostDetail)
async def get_post(slug: str, index: ContentIndex = Depends(get_content_index)):
    """Get a single post with its rendered body, series and related posts."""
    post = index.get_post_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    summary = PostSummary.from_post(post)
    return PostDetail(
        **summary.model_dump(),
        keywords=post.keywords,
        raw_body=post.raw_body,
        rendered_body=post.rendered_body,
        table_of_contents=post.table_of_contents,
        series=index.get_series(post.slug),
        related=get_related_posts(post, index.get_all_posts()),
    )
