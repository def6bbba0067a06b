"""Post data models."""

from datetime import datetime
from functools import cached_property

from pydantic import BaseModel, ConfigDict

from postgraph.services.excerpt import make_excerpt, make_group_excerpt

# Tag bucket for posts that declare no tags
UNDEFINED_TAG = "undefined"


class Post(BaseModel):
    """One normalized markdown source file.

    Immutable once built. ``excerpt`` is derived from ``raw_body`` on first
    access and cached on the instance.
    """

    model_config = ConfigDict(frozen=True)

    slug: str
    source_path: str
    title: str
    date: datetime
    tags: list[str]
    keywords: list[str] = []
    category: str | None = None
    featured_image: str | None = None
    raw_body: str = ""
    rendered_body: str = ""
    table_of_contents: str = ""

    @cached_property
    def excerpt(self) -> str:
        return make_excerpt(self.raw_body)

    @property
    def display_tags(self) -> list[str]:
        """Tags without the ``undefined`` sentinel."""
        return [t for t in self.tags if t != UNDEFINED_TAG]


class SeriesEntry(BaseModel):
    """A post's position in a numbered series."""

    model_config = ConfigDict(frozen=True)

    series_key: str
    order: int
    slug: str
    title: str


class PostSummary(BaseModel):
    """Post metadata for list display."""

    slug: str
    title: str
    date: datetime
    tags: list[str]
    category: str | None = None
    featured_image: str | None = None
    excerpt: str = ""

    @classmethod
    def from_post(cls, post: Post, *, group_listing: bool = False) -> "PostSummary":
        excerpt = make_group_excerpt(post.raw_body) if group_listing else post.excerpt
        return cls(
            slug=post.slug,
            title=post.title,
            date=post.date,
            tags=post.tags,
            category=post.category,
            featured_image=post.featured_image,
            excerpt=excerpt,
        )


class RelatedPost(BaseModel):
    """A post recommended alongside another, with its relevance score."""

    slug: str
    title: str
    date: datetime
    category: str | None = None
    tags: list[str] = []
    score: float


class PostDetail(PostSummary):
    """Full post data for a single post page."""

    keywords: list[str] = []
    raw_body: str
    rendered_body: str = ""
    table_of_contents: str = ""
    series: list[SeriesEntry] = []
    related: list[RelatedPost] = []


class PostIndex(BaseModel):
    """Post list index."""

    posts: list[PostSummary]
    total: int


class TagSummary(BaseModel):
    """A tag and the number of posts carrying it."""

    name: str
    total_count: int


class TagIndex(BaseModel):
    """Tag list index."""

    tags: list[TagSummary]
    total: int
