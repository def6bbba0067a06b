"""Image-reference rewriting for post bodies.

Relative image links in a post (``![alt](images/ride.png)``) become absolute
site paths of the form ``/posts/<post_dir>/images/<file>``. The image route
resolves those paths back to files under the content root.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

IMAGE_URL_PREFIX = "/posts/"
IMAGES_DIR = "images"

# ![alt](path) or ![alt](path "title")
_IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)((?:\s+"[^"]*")?)\s*\)')

# Leading "./", "/" and one "images/" prefix
_LOCAL_PREFIX_RE = re.compile(r"^\.?/?(?:images/)?")

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

# Opening of any image reference, matched or not
_IMAGE_START_RE = re.compile(r"!\[[^\]]*\]\(")


@dataclass(frozen=True)
class ImageRewrite:
    """One rewritten image reference."""

    original: str
    rewritten: str


def _is_external(path: str) -> bool:
    return bool(_SCHEME_RE.match(path)) or path.startswith("//")


def _log_unmatched_images(body: str) -> None:
    matched = {m.start() for m in _IMAGE_RE.finditer(body)}
    for m in _IMAGE_START_RE.finditer(body):
        if m.start() not in matched:
            reference = body[m.start() :].split("\n", 1)[0]
            logger.debug("Image reference not rewritten: %s", reference)


def image_url(post_dir: str, filename: str) -> str:
    """Build the site path for *filename* in *post_dir*'s images folder."""
    parts = [p for p in (post_dir.strip("/"), IMAGES_DIR, filename) if p]
    return "/" + "/".join(["posts", *parts])


def rewrite_image_paths(body: str, post_dir: str) -> tuple[str, list[ImageRewrite]]:
    """Rewrite local image references in *body* to absolute site paths.

    External URLs and paths already under ``/posts/`` are left alone, so the
    transform is idempotent. Image files are not checked for existence.

    Returns:
        Tuple of (rewritten body, list of rewrites performed).
    """
    rewrites: list[ImageRewrite] = []

    def _replace(match: re.Match) -> str:
        alt, path, title = match.group(1), match.group(2), match.group(3)
        if _is_external(path) or path.startswith(IMAGE_URL_PREFIX):
            return match.group(0)

        stripped = _LOCAL_PREFIX_RE.sub("", path, count=1)
        rewritten = image_url(post_dir, stripped)
        rewrites.append(ImageRewrite(original=path, rewritten=rewritten))
        return f"![{alt}]({rewritten}{title})"

    _log_unmatched_images(body)
    text = _IMAGE_RE.sub(_replace, body)
    for rw in rewrites:
        logger.debug("Rewrote image path %s -> %s", rw.original, rw.rewritten)
    return text, rewrites


def resolve_image_file(content_root: Path, image_path: str) -> Path | None:
    """Map ``<post_dir>/images/<file>`` back to a file under *content_root*.

    Returns None when the file is absent or the path escapes the root.
    """
    root = content_root.resolve()
    candidate = (root / image_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        logger.warning("Rejected image path outside content root: %s", image_path)
        return None
    if candidate.parent.name != IMAGES_DIR or not candidate.is_file():
        return None
    return candidate
