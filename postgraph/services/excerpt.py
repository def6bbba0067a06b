"""Plain-text excerpts from markdown or HTML post bodies.

Regex stripping is enough here: input is the blog's own markdown, and the
output is only ever shown as a short plain-text teaser.
"""

import re

# Post pages and the main post list
FULL_EXCERPT_LENGTH = 300

# Tag-group listings show a shorter teaser
GROUP_EXCERPT_LENGTH = 200

ELLIPSIS = "..."

_IMAGE_RE = re.compile(r"!\[.*?\]\(.*?\)")
_HTML_TAG_RE = re.compile(r"<[^>]*>")
_MARKER_RE = re.compile(r"[#*`_~]")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_markup(text: str) -> str:
    """Remove images, HTML tags and markdown markers; collapse whitespace."""
    text = _IMAGE_RE.sub("", text)
    text = _HTML_TAG_RE.sub("", text)
    text = _MARKER_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def make_excerpt(text: str, length: int = FULL_EXCERPT_LENGTH) -> str:
    """Return a markup-free excerpt of at most *length* characters.

    ``...`` is appended only when the text was cut.
    """
    plain = strip_markup(text)
    if len(plain) <= length:
        return plain
    return plain[:length].rstrip() + ELLIPSIS


def make_group_excerpt(text: str, length: int = GROUP_EXCERPT_LENGTH) -> str:
    """Shorter excerpt used by tag-group listings."""
    return make_excerpt(text, length)
