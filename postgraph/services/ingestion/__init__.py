"""Ingestion services for turning markdown files into normalized posts."""

from postgraph.services.ingestion.frontmatter import (
    FrontMatter,
    dump_front_matter,
    parse_front_matter,
)
from postgraph.services.ingestion.images import (
    ImageRewrite,
    image_url,
    resolve_image_file,
    rewrite_image_paths,
)
from postgraph.services.ingestion.loader import (
    LoadStats,
    build_post,
    load_content_index,
    load_posts,
    scan_markdown_files,
)
from postgraph.services.ingestion.normalizer import (
    coerce_keywords,
    coerce_tags,
    normalize_post,
    parse_post_date,
)
from postgraph.services.ingestion.slugs import derive_slug, post_directory, relative_to_root

__all__ = [
    "FrontMatter",
    "ImageRewrite",
    "LoadStats",
    "build_post",
    "coerce_keywords",
    "coerce_tags",
    "derive_slug",
    "dump_front_matter",
    "image_url",
    "load_content_index",
    "load_posts",
    "normalize_post",
    "parse_front_matter",
    "parse_post_date",
    "post_directory",
    "relative_to_root",
    "resolve_image_file",
    "rewrite_image_paths",
    "scan_markdown_files",
]
