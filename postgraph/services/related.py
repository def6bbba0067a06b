"""Related-post recommendations based on shared tags and category."""

from collections.abc import Sequence

from postgraph.models.post import UNDEFINED_TAG, Post, RelatedPost

TAG_WEIGHT = 0.7
CATEGORY_WEIGHT = 0.3

DEFAULT_LIMIT = 5
DEFAULT_MIN_SCORE = 0.2


def _tag_set(post: Post) -> set[str]:
    return {t.lower() for t in post.tags if t != UNDEFINED_TAG}


def tag_similarity(a: Post, b: Post) -> float:
    """Jaccard similarity of two posts' tags (case-insensitive)."""
    tags_a, tags_b = _tag_set(a), _tag_set(b)
    if not tags_a or not tags_b:
        return 0.0
    return len(tags_a & tags_b) / len(tags_a | tags_b)


def category_similarity(a: Post, b: Post) -> float:
    if not a.category or not b.category:
        return 0.0
    return 1.0 if a.category.lower() == b.category.lower() else 0.0


def relevance_score(current: Post, candidate: Post) -> float:
    return (
        tag_similarity(current, candidate) * TAG_WEIGHT
        + category_similarity(current, candidate) * CATEGORY_WEIGHT
    )


def get_related_posts(
    current: Post,
    posts: Sequence[Post],
    limit: int = DEFAULT_LIMIT,
    min_score: float = DEFAULT_MIN_SCORE,
) -> list[RelatedPost]:
    """Return up to *limit* posts most related to *current*, best first.

    Posts scoring below *min_score* are dropped. Equal scores keep the order
    of *posts*.
    """
    related: list[RelatedPost] = []
    for post in posts:
        if post.slug == current.slug:
            continue
        score = relevance_score(current, post)
        if score >= min_score:
            related.append(
                RelatedPost(
                    slug=post.slug,
                    title=post.title,
                    date=post.date,
                    category=post.category,
                    tags=post.tags,
                    score=round(score, 4),
                )
            )

    related.sort(key=lambda r: r.score, reverse=True)
    return related[:limit]
