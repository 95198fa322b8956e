"""Utility modules for aggregators."""

from .content_extractor import extract_main_content, extract_page_title, find_lead_image
from .content_formatter import format_article_content
from .feed_entries import (
    entry_content,
    entry_date,
    entry_summary,
    find_entry,
    format_iso_datetime,
    make_article_id,
    normalize_url,
)
from .html_cleaner import (
    absolutize_urls,
    remove_empty_elements,
    remove_selectors,
    sanitize_html,
)
from .html_fetcher import fetch_feed_text, fetch_html
from .rss_parser import parse_feed_document, parse_rss_feed
from .snippet import format_snippet, text_length

__all__ = [
    "parse_rss_feed",
    "parse_feed_document",
    "fetch_html",
    "fetch_feed_text",
    "extract_main_content",
    "extract_page_title",
    "find_lead_image",
    "remove_selectors",
    "remove_empty_elements",
    "absolutize_urls",
    "sanitize_html",
    "format_article_content",
    "format_snippet",
    "text_length",
    "normalize_url",
    "find_entry",
    "entry_content",
    "entry_summary",
    "entry_date",
    "make_article_id",
    "format_iso_datetime",
]
