"""YAML front-matter parsing for markdown posts."""

import re
from dataclasses import dataclass, field
from typing import Any

import frontmatter
import yaml

from postgraph.errors import ParseError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

# Line break left in front of the body by the closing delimiter
_LEADING_NEWLINE_RE = re.compile(r"\A\r?\n")


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as the author wrote them."""


# Date normalization works on the literal string (offset handling included),
# so the implicit timestamp resolver is removed for this loader only.
_FrontMatterLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class PostYAMLHandler(frontmatter.YAMLHandler):
    """``---`` delimited YAML handler that leaves dates as strings."""

    def load(self, fm: str, **kwargs: Any) -> Any:
        kwargs.setdefault("Loader", _FrontMatterLoader)
        return super().load(fm, **kwargs)


_HANDLER = PostYAMLHandler()


@dataclass(frozen=True)
class FrontMatter:
    """Metadata block and body of a markdown document."""

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""


def parse_front_matter(text: str, path: str | None = None) -> FrontMatter:
    """Split *text* into its YAML metadata and markdown body.

    A document without a leading ``---`` block (or without a closing
    delimiter) has empty metadata and the whole text as body.

    Raises:
        ParseError: If the block is not valid YAML or not a mapping.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    if not _HANDLER.detect(text):
        return FrontMatter(metadata={}, body=text)
    try:
        block, body = _HANDLER.split(text)
    except ValueError:
        return FrontMatter(metadata={}, body=text)

    try:
        metadata = _HANDLER.load(block)
    except yaml.YAMLError as e:
        raise ParseError(path, f"malformed front-matter: {e}") from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise ParseError(
            path, f"front-matter must be a mapping, got {type(metadata).__name__}"
        )

    return FrontMatter(metadata=metadata, body=_LEADING_NEWLINE_RE.sub("", body, count=1))


def dump_front_matter(metadata: dict[str, Any], body: str = "") -> str:
    """Serialize *metadata* and *body* back into a markdown document."""
    if not metadata:
        return body
    block = _HANDLER.export(metadata, sort_keys=False)
    return f"{_HANDLER.START_DELIMITER}\n{block}\n{_HANDLER.END_DELIMITER}\n{body}"
