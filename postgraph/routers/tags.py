"""Tag endpoints."""

from fastapi import APIRouter, Depends, Query

from postgraph.dependencies import get_content_index
from postgraph.models.post import PostIndex, PostSummary, TagIndex, TagSummary
from postgraph.services.content_index import ContentIndex

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=TagIndex)
async def list_tags(
    include_undefined: bool = Query(
        default=False,
        description="Include the bucket of posts without tags",
    ),
    index: ContentIndex = Depends(get_content_index),
):
    """Get every tag with its post count, sorted by name."""
    groups = index.get_tag_groups()
    tags = [
        TagSummary(name=name, total_count=groups[name].total_count)
        for name in index.get_all_tags(include_sentinel=include_undefined)
    ]
    return TagIndex(tags=tags, total=len(tags))


@router.get("/{tag:path}", response_model=PostIndex)
async def list_posts_by_tag(tag: str, index: ContentIndex = Depends(get_content_index)):
    """Get the posts carrying *tag*; unknown tags give an empty list."""
    posts = index.get_posts_by_tag(tag)
    return PostIndex(
        posts=[PostSummary.from_post(p, group_listing=True) for p in posts],
        total=len(posts),
    )
