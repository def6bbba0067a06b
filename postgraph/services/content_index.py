"""ContentIndex — the immutable post/tag/series index for one build.

The index is built once per scan and handed to whoever needs it; there is no
module-level instance. Rebuilding means building a new index.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from postgraph.errors import DuplicateSlugError
from postgraph.models.post import UNDEFINED_TAG, Post, SeriesEntry
from postgraph.services.series import detect_series, series_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagGroup:
    """Posts sharing one tag. Holds references into the index's post list."""

    tag_name: str
    posts: tuple[Post, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.posts)


class ContentIndex:
    """Date-sorted posts with tag, category, series and slug lookups."""

    def __init__(
        self,
        posts: Sequence[Post],
        tag_groups: dict[str, TagGroup],
        series: dict[str, list[SeriesEntry]],
    ) -> None:
        self._posts = tuple(posts)
        self._by_slug = {p.slug: p for p in self._posts}
        self._tag_groups = tag_groups
        self._series = series

    @classmethod
    def empty(cls) -> "ContentIndex":
        return cls(posts=(), tag_groups={}, series={})

    def __len__(self) -> int:
        return len(self._posts)

    def get_all_posts(self) -> list[Post]:
        """All posts, newest first."""
        return list(self._posts)

    def get_post_by_slug(self, slug: str) -> Post | None:
        return self._by_slug.get(slug.strip("/"))

    def get_all_tags(self, include_sentinel: bool = False) -> list[str]:
        """Sorted tag names; the ``undefined`` bucket only when asked for."""
        return sorted(
            name
            for name in self._tag_groups
            if include_sentinel or name != UNDEFINED_TAG
        )

    def get_tag_groups(self) -> dict[str, TagGroup]:
        return dict(self._tag_groups)

    def get_posts_by_tag(self, tag: str) -> list[Post]:
        group = self._tag_groups.get(tag)
        if group is None:
            return []
        return list(group.posts)

    def get_all_categories(self) -> list[str]:
        return sorted({p.category for p in self._posts if p.category})

    def get_posts_by_category(self, category: str) -> list[Post]:
        return [p for p in self._posts if p.category == category]

    def get_series(self, slug: str) -> list[SeriesEntry]:
        """Series entries for the post's series, or [] if it is not in one."""
        key = series_key(slug.strip("/"))
        if key is None:
            return []
        return list(self._series.get(key, []))


def _check_unique_slugs(posts: Sequence[Post]) -> None:
    seen: dict[str, str] = {}
    for post in posts:
        if post.slug in seen:
            raise DuplicateSlugError(post.slug, [seen[post.slug], post.source_path])
        seen[post.slug] = post.source_path


def build_tag_groups(posts: Sequence[Post]) -> dict[str, TagGroup]:
    """Group posts by every tag they carry, in one pass."""
    members: dict[str, list[Post]] = {}
    for post in posts:
        for tag in post.tags:
            group = members.setdefault(tag, [])
            if not group or group[-1] is not post:
                group.append(post)
    return {tag: TagGroup(tag_name=tag, posts=tuple(group)) for tag, group in members.items()}


def build_content_index(posts: Sequence[Post]) -> ContentIndex:
    """Build a ContentIndex from normalized posts given in scan order.

    Posts are sorted by date, newest first; posts with equal dates keep their
    scan order.

    Raises:
        DuplicateSlugError: If two posts share a slug.
    """
    _check_unique_slugs(posts)

    series = detect_series((p.slug, p.title) for p in posts)
    sorted_posts = sorted(posts, key=lambda p: p.date, reverse=True)
    tag_groups = build_tag_groups(sorted_posts)

    logger.info(
        "Built content index: %d posts, %d tags, %d series",
        len(sorted_posts),
        len(tag_groups),
        len(series),
    )
    return ContentIndex(posts=sorted_posts, tag_groups=tag_groups, series=series)
