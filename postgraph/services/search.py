"""Post search — case-insensitive substring match on title and body."""

from collections.abc import Sequence

from postgraph.models.post import Post


def search_posts(posts: Sequence[Post], query: str, title_only: bool = False) -> list[Post]:
    """Return posts whose title (or body, unless *title_only*) contains *query*.

    A blank query matches every post. Result order follows *posts*.
    """
    needle = query.strip().lower()
    if not needle:
        return list(posts)

    matches = []
    for post in posts:
        if needle in post.title.lower():
            matches.append(post)
        elif not title_only and needle in post.raw_body.lower():
            matches.append(post)
    return matches
