"""
Feed entry helpers.

Works on feedparser entries and on the plain dicts produced by the lenient
scanner in rss_parser, which share the same keys.
"""

import hashlib
import logging
from calendar import timegm
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Iterable, List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

TRACKING_PARAMS = {"fbclid", "gclid", "ref", "ref_src", "mc_cid", "mc_eid"}

DEFAULT_PORTS = {"http": "80", "https": "443"}


def normalize_url(url: str) -> str:
    """
    Normalize a URL for comparison.

    Lower-cases scheme and host, ignores http/https differences, a leading
    "www.", default ports, fragments, tracking parameters and trailing
    slashes.

    Examples:
        >>> normalize_url("HTTPS://www.Example.com:443/post/?utm_source=rss#top")
        'example.com/post'
    """
    if not url:
        return ""

    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]

    try:
        port = parts.port
    except ValueError:
        port = None
    if port is not None and str(port) != DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"

    path = parts.path.rstrip("/")

    query_pairs = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if not key.lower().startswith("utm_") and key.lower() not in TRACKING_PARAMS
    ]
    query = urlencode(sorted(query_pairs))

    return urlunsplit(("", host, path, query, "")).lstrip("/")


def entry_links(entry: Any) -> List[str]:
    """All URLs that identify an entry: link, alternate links, permalink id."""
    urls = []

    link = entry.get("link")
    if link:
        urls.append(link)

    for link_info in entry.get("links") or []:
        href = link_info.get("href") if hasattr(link_info, "get") else None
        rel = link_info.get("rel", "alternate") if hasattr(link_info, "get") else None
        if href and rel in ("alternate", None):
            urls.append(href)

    entry_id = entry.get("id") or entry.get("guid")
    if entry_id and str(entry_id).startswith(("http://", "https://")):
        urls.append(entry_id)

    return urls


def find_entry(entries: Iterable[Any], url: str) -> Optional[Any]:
    """
    Find the feed entry for an article URL.

    Args:
        entries: Feed entries
        url: Article URL

    Returns:
        The matching entry, or None
    """
    target = normalize_url(url)
    if not target:
        return None

    for entry in entries:
        for candidate in entry_links(entry):
            if normalize_url(candidate) == target:
                return entry

    logger.debug(f"No feed entry matches {url}")
    return None


def entry_content(entry: Any) -> str:
    """
    Full content of an entry.

    feedparser exposes content:encoded and Atom <content> as a list of dicts
    with a 'value' field; all parts are joined.
    """
    content_parts = []
    for content_item in entry.get("content") or []:
        if hasattr(content_item, "get") and content_item.get("value"):
            content_parts.append(content_item["value"])
        elif isinstance(content_item, str):
            content_parts.append(content_item)
    return "".join(content_parts).strip()


def entry_summary(entry: Any) -> str:
    """Summary of an entry (description, summary or contentSnippet)."""
    return (
        entry.get("summary") or entry.get("description") or entry.get("contentSnippet") or ""
    ).strip()


def entry_date(entry: Any) -> Optional[datetime]:
    """
    Publication date of an entry as an aware UTC datetime.

    Uses feedparser's parsed struct when present, otherwise parses the raw
    string as RFC 2822 or ISO 8601.
    """
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            return datetime.fromtimestamp(timegm(parsed), tz=timezone.utc)

    for key in ("published", "pubDate", "updated", "date"):
        raw = entry.get(key)
        if raw:
            parsed_date = parse_date_string(raw)
            if parsed_date:
                return parsed_date

    return None


def parse_date_string(value: str) -> Optional[datetime]:
    """Parse an RFC 2822 or ISO 8601 date string into an aware UTC datetime."""
    value = (value or "").strip()
    if not value:
        return None

    parsed = None
    try:
        parsed = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        parsed = None

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unparseable date: {value}")
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def make_article_id(url: str) -> str:
    """
    Stable, URL-safe article id derived from the article link.

    Links that normalize to the same URL share an id.
    """
    return hashlib.sha256(normalize_url(url).encode("utf-8")).hexdigest()[:16]


def format_iso_datetime(value: datetime) -> str:
    """Format a datetime as ISO 8601 in UTC with millisecond precision and a Z suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
