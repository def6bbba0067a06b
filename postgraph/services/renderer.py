"""Markdown → HTML rendering for post bodies."""

import re
from dataclasses import dataclass

import markdown

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc"]

# ```toc``` marks where the old site placed its table of contents; the TOC is
# now returned separately and rendered beside the post.
_TOC_BLOCK_RE = re.compile(r"```toc\s*```")


@dataclass(frozen=True)
class RenderedMarkdown:
    """Rendered post HTML plus its table of contents."""

    html: str
    toc: str


def render_markdown(text: str) -> RenderedMarkdown:
    """Render *text* to HTML and build a table of contents from its headings.

    ``toc`` is empty when the post has no headings.
    """
    md = markdown.Markdown(
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs={"toc": {"toc_depth": "1-3"}},
    )
    html = md.convert(_TOC_BLOCK_RE.sub("", text))
    toc = md.toc if getattr(md, "toc_tokens", None) else ""
    return RenderedMarkdown(html=html, toc=toc)
