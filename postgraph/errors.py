"""Content pipeline errors.

File-scoped errors (``ParseError``, ``ValidationError``) exclude one post and
let the scan continue. Root-scoped errors (``ContentRootError``,
``DuplicateSlugError``) abort the build and reach the caller.
"""


class ContentError(Exception):
    """Base class for content pipeline errors."""


class ParseError(ContentError):
    """Front-matter block could not be parsed."""

    def __init__(self, path: str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path or '<string>'}: {reason}")


class ValidationError(ContentError):
    """Front-matter is missing a required field or holds an unusable value."""

    def __init__(self, path: str | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path or '<string>'}: {reason}")


class InvalidPathError(ContentError, ValueError):
    """Path is empty, absolute, or escapes the content root."""


class NotFoundError(ContentError):
    """Content root or requested post does not exist."""


class ContentRootError(ContentError, OSError):
    """Content root exists but cannot be scanned."""


class DuplicateSlugError(ContentError):
    """Two source files normalize to the same slug."""

    def __init__(self, slug: str, paths: list[str]) -> None:
        self.slug = slug
        self.paths = paths
        super().__init__(f"Duplicate slug {slug!r} from: {', '.join(paths)}")
