"""Post normalization — turns parsed front-matter into a canonical Post."""

import logging
from datetime import date, datetime, time, timezone
from typing import Any

import pydantic

from postgraph.errors import ValidationError
from postgraph.models.post import UNDEFINED_TAG, Post

logger = logging.getLogger(__name__)

# Raw ``tags`` values as authors write them: missing, one string, or a list
TagsInput = str | list[Any] | None


def coerce_tags(value: TagsInput | Any) -> list[str]:
    """Normalize a raw ``tags`` value to a non-empty list of strings.

    Missing or empty tags become ``["undefined"]``.
    """
    if value is None or value == "":
        return [UNDEFINED_TAG]
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        tags = [str(t).strip() for t in value if t is not None and str(t).strip()]
        return tags or [UNDEFINED_TAG]
    return [str(value)]


def coerce_keywords(value: Any, site_title: str, site_author: str) -> list[str]:
    """Normalize ``keywords``, falling back to the site title and author."""
    if not value:
        return [site_title, site_author]
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(k) for k in value if k is not None]
    return [str(value)]


def parse_post_date(value: Any) -> datetime:
    """Parse a front-matter date into a naive datetime.

    Strings with a ``+`` offset are cut at the ``+`` and only the prefix is
    parsed, so ``2020-01-01T10:00:00+09:00`` reads as 10:00 wall-clock time.
    Other aware values are converted to UTC and made naive.

    Raises:
        ValueError: If the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.split("+", 1)[0].strip()
        if not text:
            raise ValueError(f"empty date: {value!r}")
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"unsupported date value: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def normalize_post(
    metadata: dict[str, Any],
    body: str,
    slug: str,
    source_path: str,
    *,
    site_title: str,
    site_author: str,
    rendered_body: str = "",
    table_of_contents: str = "",
) -> Post:
    """Build a Post from parsed front-matter and an already-derived slug.

    Raises:
        ValidationError: If ``title`` or ``date`` is missing or ``date``
            cannot be parsed.
    """
    title = metadata.get("title")
    if title is None or not str(title).strip():
        raise ValidationError(source_path, "missing required field 'title'")

    raw_date = metadata.get("date")
    if raw_date is None or raw_date == "":
        raise ValidationError(source_path, "missing required field 'date'")
    try:
        post_date = parse_post_date(raw_date)
    except ValueError as e:
        raise ValidationError(source_path, f"unparsable date {raw_date!r}") from e

    try:
        return Post(
            slug=slug,
            source_path=source_path,
            title=str(title).strip(),
            date=post_date,
            tags=coerce_tags(metadata.get("tags")),
            keywords=coerce_keywords(metadata.get("keywords"), site_title, site_author),
            category=_optional_str(metadata.get("category")),
            featured_image=_optional_str(metadata.get("featuredImage")),
            raw_body=body,
            rendered_body=rendered_body,
            table_of_contents=table_of_contents,
        )
    except pydantic.ValidationError as e:
        raise ValidationError(source_path, str(e)) from e
