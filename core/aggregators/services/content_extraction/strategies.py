"""
Content extraction strategies using Strategy Pattern.

Provides strategies for getting the readable body of an article:
1. FeedEntryStrategy - Full content embedded in the feed entry
2. WebPageStrategy - Main container of the live web page
3. SnippetStrategy - Fallback to the known preview text
"""

import html
import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests
from bs4 import BeautifulSoup

from core.aggregators.exceptions import ArticleSkipError
from core.aggregators.services import config
from core.aggregators.services.content_extraction.context import (
    ExtractedContent,
    ExtractionContext,
)
from core.aggregators.utils.bs4_utils import get_attr_str
from core.aggregators.utils.content_extractor import (
    extract_main_content,
    extract_page_title,
    find_lead_image,
)
from core.aggregators.utils.content_formatter import format_article_content
from core.aggregators.utils.feed_entries import entry_content, entry_summary, find_entry
from core.aggregators.utils.html_cleaner import (
    absolutize_urls,
    remove_empty_elements,
    sanitize_html,
)
from core.aggregators.utils.html_fetcher import fetch_html
from core.aggregators.utils.http_errors import is_4xx_error
from core.aggregators.utils.rss_parser import parse_rss_feed
from core.aggregators.utils.snippet import format_snippet, text_length

logger = logging.getLogger(__name__)

# Elements left without text after cleaning
EMPTY_CHECK_TAGS = ["p", "div", "span", "section", "figure", "li"]


class ExtractionStrategy(ABC):
    """Base class for content extraction strategies."""

    # Name reported in ExtractedContent.strategy
    name = ""

    @abstractmethod
    def can_handle(self, context: ExtractionContext) -> bool:
        """Check if this strategy can run for the context."""
        pass

    @abstractmethod
    def create(self, context: ExtractionContext) -> Optional[ExtractedContent]:
        """
        Extract the article body.

        Returns:
            ExtractedContent object, or None if this strategy found nothing usable
        """
        pass


class FeedEntryStrategy(ExtractionStrategy):
    """Strategy for content shipped inside the feed entry (content:encoded, Atom content)."""

    name = "feed"

    def can_handle(self, context: ExtractionContext) -> bool:
        return bool(context.feed_url)

    def create(self, context: ExtractionContext) -> Optional[ExtractedContent]:
        logger.debug(f"FeedEntryStrategy: Looking up {context.url} in {context.feed_url}")

        feed = parse_rss_feed(context.feed_url)
        entry = find_entry(feed["entries"], context.url)
        if entry is None:
            logger.debug("FeedEntryStrategy: Article not found in feed")
            return None

        summary = entry_summary(entry)
        if summary and not context.feed_summary:
            context.feed_summary = summary

        content = entry_content(entry)
        if text_length(content) < config.MIN_CONTENT_LENGTH:
            # Summary-only feeds: the description is usually a teaser
            if text_length(summary) >= config.MIN_CONTENT_LENGTH:
                content = summary
            else:
                logger.debug("FeedEntryStrategy: Entry content too short")
                return None

        title = context.title or entry.get("title") or ""
        body = sanitize_html(content, base_url=context.url)

        return ExtractedContent(
            html=format_article_content(body, title, context.url),
            strategy=self.name,
            url=context.url,
            title=title,
        )


class WebPageStrategy(ExtractionStrategy):
    """Strategy for the main container of the article web page."""

    name = "webpage"

    def can_handle(self, context: ExtractionContext) -> bool:
        return context.url.startswith(("http://", "https://"))

    def create(self, context: ExtractionContext) -> Optional[ExtractedContent]:
        logger.debug(f"WebPageStrategy: Fetching {context.url}")

        try:
            page = fetch_html(context.url)
        except requests.RequestException as e:
            status_code = is_4xx_error(e)
            if status_code:
                raise ArticleSkipError(
                    f"Article page returned {status_code}",
                    status_code=status_code,
                    original_error=e,
                )
            logger.warning(f"WebPageStrategy: Failed to fetch {context.url}: {e}")
            return None

        soup = BeautifulSoup(page, "html.parser")

        # Relative URLs must be resolved while <base> is still in the document
        absolutize_urls(soup, context.url)
        image_url = find_lead_image(soup, context.url)
        title = context.title or extract_page_title(soup)

        fragment = extract_main_content(str(soup), remove_selectors=config.REMOVE_SELECTORS)

        cleaned = BeautifulSoup(sanitize_html(fragment), "html.parser")
        remove_empty_elements(cleaned, EMPTY_CHECK_TAGS)
        body = str(cleaned).strip()

        if text_length(body) < config.MIN_CONTENT_LENGTH:
            logger.debug("WebPageStrategy: Extracted text too short")
            return None

        # The lead image is already part of the body in most articles
        body_images = {get_attr_str(img, "src") for img in cleaned.find_all("img")}
        header_image_url = image_url if image_url and image_url not in body_images else None

        return ExtractedContent(
            html=format_article_content(body, title, context.url, header_image_url=header_image_url),
            strategy=self.name,
            url=context.url,
            title=title,
            image_url=image_url,
        )


class SnippetStrategy(ExtractionStrategy):
    """Fallback strategy returning the preview text."""

    name = "snippet"

    def can_handle(self, context: ExtractionContext) -> bool:
        return bool(context.snippet or context.feed_summary)

    def create(self, context: ExtractionContext) -> Optional[ExtractedContent]:
        snippet = context.snippet or format_snippet(context.feed_summary)
        if not snippet:
            return None

        return ExtractedContent(
            html=f"<p>{html.escape(snippet, quote=False)}</p>",
            strategy=self.name,
            url=context.url,
            title=context.title,
        )
