"""Category, search and RSS endpoints."""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from postgraph.config import get_settings
from postgraph.dependencies import get_content_index
from postgraph.models.post import PostIndex, PostSummary
from postgraph.services.content_index import ContentIndex
from postgraph.services.feed import build_rss_feed
from postgraph.services.search import search_posts

router = APIRouter(tags=["discovery"])


@router.get("/categories")
async def list_categories(index: ContentIndex = Depends(get_content_index)):
    """Get the sorted list of post categories."""
    categories = index.get_all_categories()
    return {"categories": categories, "total": len(categories)}


@router.get("/search", response_model=PostIndex)
async def search(
    q: str = Query(default="", max_length=200),
    title_only: bool = Query(default=False),
    index: ContentIndex = Depends(get_content_index),
):
    """Search post titles (and bodies unless ``title_only``)."""
    posts = search_posts(index.get_all_posts(), q, title_only=title_only)
    return PostIndex(posts=[PostSummary.from_post(p) for p in posts], total=len(posts))


@router.get("/rss")
async def rss_feed(index: ContentIndex = Depends(get_content_index)):
    """RSS 2.0 feed of the newest posts."""
    feed = build_rss_feed(index.get_all_posts(), get_settings())
    return Response(content=feed, media_type="application/rss+xml")
