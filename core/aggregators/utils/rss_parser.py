"""RSS feed parsing utilities."""

import html
import logging
import re
from typing import Any, Dict, List, Union
from urllib.parse import urlparse

import feedparser

from ..exceptions import ParseError
from .html_fetcher import fetch_feed_text

logger = logging.getLogger(__name__)

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.S)
_ITEM_RE = re.compile(r"<(item|entry)(?=[\s/>])[^>]*>(.*?)</\1\s*>", re.S | re.I)
_ENCODING_RE = re.compile(rb"""<\?xml[^>]*encoding=["']([A-Za-z0-9._-]+)["']""")
_ATTR_RE = re.compile(r"""([\w:-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")


def parse_rss_feed(url: str) -> Dict[str, Any]:
    """
    Download and parse an RSS/Atom feed.

    Args:
        url: RSS feed URL

    Returns:
        Parsed feed dictionary with 'feed', 'entries', 'version' and 'bozo' keys

    Raises:
        ValueError: If the URL is invalid
        requests.RequestException: If the feed cannot be downloaded
        ParseError: If no entries can be read from the document
    """
    # Validate URL
    parsed_url = urlparse(url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        raise ValueError(f"Invalid feed URL: {url}")

    data = fetch_feed_text(url)
    return parse_feed_document(data, source=url)


def parse_feed_document(data: Union[bytes, str], source: str = "") -> Dict[str, Any]:
    """
    Parse an already downloaded feed document.

    feedparser handles RSS 0.9x/2.0, RSS 1.0 (RDF) and Atom. Documents it
    cannot recover from are handed to the lenient regex scanner.

    Args:
        data: Feed document
        source: Feed URL, for log messages

    Returns:
        Parsed feed dictionary with 'feed', 'entries', 'version' and 'bozo' keys

    Raises:
        ParseError: If no entries can be read from the document
    """
    feed = feedparser.parse(data)

    if feed.entries:
        if feed.bozo:
            logger.warning(
                f"Feed {source or '<document>'} is malformed but readable: "
                f"{feed.get('bozo_exception')}"
            )
        return {
            "feed": feed.feed,
            "entries": feed.entries,
            "version": feed.version,
            "bozo": bool(feed.bozo),
        }

    if feed.bozo:
        logger.warning(
            f"feedparser could not read {source or '<document>'} "
            f"({feed.get('bozo_exception')}), scanning items directly"
        )
        entries = scan_feed_items(_decode(data))
        if entries:
            logger.info(f"Recovered {len(entries)} entries from {source or '<document>'}")
            return {"feed": {}, "entries": entries, "version": "", "bozo": True}

    raise ParseError(f"No entries found in feed: {source or '<document>'}")


def scan_feed_items(text: str) -> List[Dict[str, Any]]:
    """
    Read <item>/<entry> blocks out of a document that is not well-formed XML.

    Returns entry dicts shaped like feedparser entries (title, link, links,
    id, published, summary, content) so callers treat both alike.
    """
    entries = []

    for match in _ITEM_RE.finditer(text):
        block = match.group(2)

        title = _field_text(block, ["title"])
        link = _find_link(block)
        guid = _field_text(block, ["guid", "id"])
        published = _field_text(block, ["pubDate", "published", "updated", "dc:date"])
        content = _field_text(block, ["content:encoded", "content"])
        summary = _field_text(block, ["description", "summary"])

        if not link and guid.startswith(("http://", "https://")):
            link = guid

        entry: Dict[str, Any] = {
            "title": _strip_tags(title),
            "link": link,
            "links": [{"rel": "alternate", "href": link}] if link else [],
            "id": guid,
            "published": published,
            "summary": summary,
        }
        if content:
            entry["content"] = [{"value": content, "type": "text/html"}]
        entries.append(entry)

    return entries


def _decode(data: Union[bytes, str]) -> str:
    if isinstance(data, str):
        return data

    encoding = "utf-8"
    declared = _ENCODING_RE.search(data[:200])
    if declared:
        encoding = declared.group(1).decode("ascii")

    try:
        return data.decode(encoding, errors="replace")
    except LookupError:
        return data.decode("utf-8", errors="replace")


def _unwrap(value: str) -> str:
    """Unwrap CDATA sections and unescape entity-encoded markup outside them."""
    parts = []
    position = 0
    for match in _CDATA_RE.finditer(value):
        parts.append(html.unescape(value[position : match.start()]))
        parts.append(match.group(1))
        position = match.end()
    parts.append(html.unescape(value[position:]))
    return "".join(parts).strip()


def _field_text(block: str, names: List[str]) -> str:
    for name in names:
        pattern = rf"<{re.escape(name)}(?=[\s/>])[^>]*?(?<!/)>(.*?)</{re.escape(name)}\s*>"
        match = re.search(pattern, block, re.S | re.I)
        if match:
            value = _unwrap(match.group(1))
            if value:
                return value
    return ""


def _find_link(block: str) -> str:
    # RSS: <link>url</link>
    match = re.search(r"<link(?=[\s/>])[^>]*?(?<!/)>(.*?)</link\s*>", block, re.S | re.I)
    if match:
        value = _unwrap(match.group(1))
        if value:
            return value

    # Atom: <link rel="alternate" href="url"/>
    fallback = ""
    for tag in re.finditer(r"<link(?=[\s/>])([^>]*)>", block, re.I):
        attrs = _parse_attrs(tag.group(1))
        href = attrs.get("href", "")
        if not href:
            continue
        rel = attrs.get("rel", "alternate")
        if rel == "alternate":
            return html.unescape(href)
        fallback = fallback or html.unescape(href)
    return fallback


def _parse_attrs(raw: str) -> Dict[str, str]:
    return {
        name.lower(): double if double else single
        for name, double, single in _ATTR_RE.findall(raw)
    }


def _strip_tags(value: str) -> str:
    return re.sub(r"<[^>]*>", "", value).strip()
