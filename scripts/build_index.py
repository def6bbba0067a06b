"""Build the content index from the command line.

Usage:
    python -m scripts.build_index                     # Scan the configured content root
    python -m scripts.build_index --root _posts       # Scan another directory
    python -m scripts.build_index --output posts.json # Also write a JSON manifest
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from postgraph.config import get_settings
from postgraph.errors import ContentRootError, DuplicateSlugError
from postgraph.models.post import PostSummary
from postgraph.services.content_index import ContentIndex
from postgraph.services.ingestion.loader import load_content_index

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def write_manifest(index: ContentIndex, output: Path) -> None:
    """Write post summaries and tag counts as JSON."""
    groups = index.get_tag_groups()
    manifest = {
        "posts": [
            PostSummary.from_post(p).model_dump(mode="json")
            for p in index.get_all_posts()
        ],
        "tags": {name: groups[name].total_count for name in index.get_all_tags()},
        "categories": index.get_all_categories(),
    }
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(manifest, f, ensure_ascii=False, indent=2)


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build the blog content index")
    parser.add_argument("--root", type=Path, help="Content root (default: settings)")
    parser.add_argument("--output", type=Path, help="Write a JSON manifest here")
    args = parser.parse_args(argv)

    settings = get_settings()
    try:
        index, stats = await load_content_index(settings, root=args.root)
    except (ContentRootError, DuplicateSlugError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print("\nIndex build complete:")
    print(f"  Found:    {stats.found}")
    print(f"  Loaded:   {stats.loaded}")
    print(f"  Skipped:  {stats.skipped}")
    print(f"  Tags:     {len(index.get_all_tags())}")
    for path, reason in stats.skipped_files:
        print(f"    - {path}: {reason}")

    if args.output:
        write_manifest(index, args.output)
        print(f"\nWrote manifest -> {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
