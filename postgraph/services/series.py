"""Series detection from slug naming (``prefix_N``).

Posts named ``tutorial_1``, ``tutorial_2`` ... form one series, ordered by the
numeric suffix. A slug with three or more ``_``-separated tokens is never part
of a series, even when its last token is numeric; existing series pages rely
on this cut-off.
"""

import re
from collections.abc import Iterable

from postgraph.models.post import SeriesEntry

_DIGITS_RE = re.compile(r"[0-9]+")

# Slugs with this many "_" tokens or more are never series members
MAX_SERIES_TOKENS = 3


def series_order(slug: str) -> int:
    """Return the slug's position in its series, or 0 if it is not in one."""
    tokens = slug.split("_")
    if len(tokens) >= MAX_SERIES_TOKENS:
        return 0

    suffix = tokens[-1].replace("/", "")
    if _DIGITS_RE.fullmatch(suffix):
        return int(suffix)
    return 0


def is_series_member(slug: str) -> bool:
    """True if *slug* has a ``_N`` suffix and fewer than three ``_`` tokens."""
    return len(slug.split("_")) > 1 and series_order(slug) > 0


def series_key(slug: str) -> str | None:
    """Return the series a slug belongs to (its first ``_`` segment), or None."""
    if not is_series_member(slug):
        return None
    return slug.split("_")[0]


def detect_series(entries: Iterable[tuple[str, str]]) -> dict[str, list[SeriesEntry]]:
    """Group ``(slug, title)`` pairs into series.

    Members of each series are sorted by ascending order; equal orders keep
    the order they appear in *entries*.

    Returns:
        Mapping of series key to its sorted entries. Slugs outside any series
        do not appear.
    """
    groups: dict[str, list[SeriesEntry]] = {}
    for slug, title in entries:
        if not is_series_member(slug):
            continue
        order = series_order(slug)
        key = slug.split("_")[0]
        groups.setdefault(key, []).append(
            SeriesEntry(series_key=key, order=order, slug=slug, title=title)
        )

    for members in groups.values():
        members.sort(key=lambda e: e.order)
    return groups
