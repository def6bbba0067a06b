"""Slug derivation from content-root-relative file paths.

The on-disk hierarchy is the URL hierarchy: ``bicycle/2018/08/24/ride.md``
becomes ``bicycle/2018/08/24/ride``.
"""

import posixpath
from pathlib import Path, PurePath

from postgraph.errors import InvalidPathError


def _normalize_relative(relative_path: str | PurePath) -> str:
    raw = str(relative_path).replace("\\", "/").strip()
    if not raw:
        raise InvalidPathError("Empty post path")
    if raw.startswith("/"):
        raise InvalidPathError(f"Post path must be relative: {raw!r}")

    normalized = posixpath.normpath(raw)
    if normalized == "." or normalized == ".." or normalized.startswith("../"):
        raise InvalidPathError(f"Post path escapes the content root: {raw!r}")
    return normalized


def derive_slug(relative_path: str | PurePath) -> str:
    """Return the slug for a post file path relative to the content root.

    Only the file extension is removed; directory separators are kept.

    Raises:
        InvalidPathError: If the path is empty, absolute, or escapes the root.
    """
    normalized = _normalize_relative(relative_path)
    stem, _ext = posixpath.splitext(normalized)
    if not posixpath.basename(stem):
        raise InvalidPathError(f"Post path has no file name: {relative_path!r}")
    return stem


def post_directory(slug: str) -> str:
    """Return the directory part of a slug (``""`` for top-level posts)."""
    return posixpath.dirname(slug)


def relative_to_root(path: Path, root: Path) -> str:
    """Return *path* relative to *root* in ``/``-separated form.

    Raises:
        InvalidPathError: If *path* does not lie under *root*.
    """
    try:
        relative = path.resolve().relative_to(root.resolve())
    except ValueError as e:
        raise InvalidPathError(f"{path} is outside content root {root}") from e
    return relative.as_posix()
