"""RSS 2.0 feed of the newest posts."""

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from datetime import datetime, timezone
from email.utils import format_datetime

from postgraph.config import Settings
from postgraph.models.post import Post

ATOM_NS = "http://www.w3.org/2005/Atom"
FEED_LANGUAGE = "ko-KR"
FEED_TTL_MINUTES = 1440

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

ET.register_namespace("atom", ATOM_NS)


def _rfc822(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt)


def post_url(settings: Settings, slug: str) -> str:
    return f"{settings.site_url.rstrip('/')}/posts/{slug}"


def build_rss_feed(posts: Sequence[Post], settings: Settings, limit: int | None = None) -> str:
    """Render the newest *limit* posts as an RSS 2.0 document.

    *posts* must already be sorted newest first.
    """
    limit = settings.feed_size if limit is None else limit
    latest = list(posts[:limit])
    site_url = settings.site_url.rstrip("/")

    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = settings.site_title
    ET.SubElement(channel, "description").text = settings.site_description
    ET.SubElement(channel, "link").text = site_url
    ET.SubElement(
        channel,
        f"{{{ATOM_NS}}}link",
        {"href": f"{site_url}/rss", "rel": "self", "type": "application/rss+xml"},
    )
    ET.SubElement(channel, "language").text = FEED_LANGUAGE
    ET.SubElement(channel, "lastBuildDate").text = _rfc822(datetime.now(timezone.utc))
    if latest:
        ET.SubElement(channel, "pubDate").text = _rfc822(latest[0].date)
    ET.SubElement(channel, "ttl").text = str(FEED_TTL_MINUTES)

    for post in latest:
        url = post_url(settings, post.slug)
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = post.title
        ET.SubElement(item, "description").text = post.excerpt
        ET.SubElement(item, "link").text = url
        ET.SubElement(item, "guid", {"isPermaLink": "true"}).text = url
        ET.SubElement(item, "pubDate").text = _rfc822(post.date)
        if post.category:
            ET.SubElement(item, "category").text = post.category
        for tag in post.display_tags:
            ET.SubElement(item, "category").text = tag

    return XML_DECLARATION + ET.tostring(rss, encoding="unicode")
