"""Content loading — ties scan, parse, slug, image rewrite, render and normalize together."""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from postgraph.config import Settings, get_settings
from postgraph.errors import (
    ContentRootError,
    InvalidPathError,
    NotFoundError,
    ParseError,
    ValidationError,
)
from postgraph.models.post import Post
from postgraph.services.content_index import ContentIndex, build_content_index
from postgraph.services.ingestion.frontmatter import parse_front_matter
from postgraph.services.ingestion.images import rewrite_image_paths
from postgraph.services.ingestion.normalizer import normalize_post
from postgraph.services.ingestion.slugs import derive_slug, post_directory, relative_to_root
from postgraph.services.renderer import render_markdown

logger = logging.getLogger(__name__)

MARKDOWN_GLOB = "*.md"

# Directory names never scanned for posts
IGNORED_DIRS = frozenset({"node_modules", ".next", ".git"})

# Errors that exclude one file without stopping the scan
_FILE_ERRORS = (ParseError, ValidationError, InvalidPathError, OSError, UnicodeDecodeError)


@dataclass
class LoadStats:
    """Stats from one content scan."""

    found: int = 0
    loaded: int = 0
    skipped: int = 0
    skipped_files: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "found": self.found,
            "loaded": self.loaded,
            "skipped": self.skipped,
            "skipped_files": [
                {"path": path, "reason": reason} for path, reason in self.skipped_files
            ],
        }


def _is_ignored(path: Path, root: Path) -> bool:
    # Dot-files and dot-directories are hidden from the scan
    parts = path.relative_to(root).parts
    if any(part.startswith(".") for part in parts):
        return True
    return any(part in IGNORED_DIRS for part in parts[:-1])


def scan_markdown_files(root: Path) -> list[Path]:
    """List markdown files under *root*, sorted by path.

    Raises:
        NotFoundError: If *root* does not exist.
        ContentRootError: If *root* is not a readable directory.
    """
    if not root.exists():
        raise NotFoundError(f"Content root not found: {root}")
    if not root.is_dir():
        raise ContentRootError(f"Content root is not a directory: {root}")

    try:
        with os.scandir(root):
            pass
        paths = [
            p
            for p in root.rglob(MARKDOWN_GLOB)
            if p.is_file() and not _is_ignored(p, root)
        ]
    except OSError as e:
        raise ContentRootError(f"Cannot scan content root {root}: {e}") from e

    return sorted(paths)


def build_post(text: str, relative_path: str, settings: Settings) -> Post:
    """Run the per-file pipeline on one document's text.

    Raises:
        ParseError: On malformed front-matter.
        ValidationError: On missing/invalid required fields.
        InvalidPathError: If the path cannot be turned into a slug.
    """
    front = parse_front_matter(text, relative_path)
    slug = derive_slug(relative_path)
    body, _rewrites = rewrite_image_paths(front.body, post_directory(slug))

    rendered_body = ""
    table_of_contents = ""
    if settings.render_html:
        rendered = render_markdown(body)
        rendered_body, table_of_contents = rendered.html, rendered.toc

    return normalize_post(
        front.metadata,
        body,
        slug,
        relative_path,
        site_title=settings.site_title,
        site_author=settings.site_author,
        rendered_body=rendered_body,
        table_of_contents=table_of_contents,
    )


async def _load_file(
    path: Path, root: Path, settings: Settings, semaphore: asyncio.Semaphore
) -> Post:
    relative_path = relative_to_root(path, root)
    async with semaphore:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
    return build_post(text, relative_path, settings)


async def load_posts(
    root: Path, settings: Settings | None = None
) -> tuple[list[Post], LoadStats]:
    """Load every markdown file under *root* into Posts, in scan order.

    Files are read concurrently; the result waits for all of them. A file
    that cannot be read or normalized is skipped and logged.

    Raises:
        NotFoundError: If *root* does not exist.
        ContentRootError: If *root* cannot be scanned.
    """
    settings = settings or get_settings()
    paths = await asyncio.to_thread(scan_markdown_files, root)
    stats = LoadStats(found=len(paths))
    if not paths:
        logger.warning("No markdown files found in %s", root)
        return [], stats

    semaphore = asyncio.Semaphore(max(1, settings.max_concurrent_reads))
    results = await asyncio.gather(
        *[_load_file(path, root, settings, semaphore) for path in paths],
        return_exceptions=True,
    )

    posts: list[Post] = []
    for path, result in zip(paths, results):
        if isinstance(result, Post):
            posts.append(result)
            continue

        if not isinstance(result, Exception):
            raise result
        if isinstance(result, _FILE_ERRORS):
            logger.warning("Skipping %s: %s", path, result)
        else:
            logger.error("Unexpected error loading %s: %s", path, result, exc_info=result)
        stats.skipped += 1
        stats.skipped_files.append((str(path), str(result)))

    stats.loaded = len(posts)
    logger.info(
        "Loaded %d posts from %s (%d found, %d skipped)",
        stats.loaded,
        root,
        stats.found,
        stats.skipped,
    )
    return posts, stats


async def load_content_index(
    settings: Settings | None = None, root: Path | None = None
) -> tuple[ContentIndex, LoadStats]:
    """Scan the content root and build a fresh ContentIndex.

    A missing content root yields an empty index. An unreadable root or a
    slug collision is raised to the caller.

    Raises:
        ContentRootError: If the root cannot be scanned.
        DuplicateSlugError: If two files map to the same slug.
    """
    settings = settings or get_settings()
    root = root or settings.content_root
    try:
        posts, stats = await load_posts(root, settings)
    except NotFoundError as e:
        logger.warning("%s; serving an empty index", e)
        return ContentIndex.empty(), LoadStats()

    return build_content_index(posts), stats
