"""Base aggregator class for implementing feed providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

from .exceptions import ValidationError
from .sources import FeedSource

# Fields every article needs to be listed
REQUIRED_FIELDS = ("title", "url", "snippet", "publicationDatetime")


class BaseAggregator(ABC):
    """Base class for all aggregators using Template Method pattern."""

    def __init__(self, source: FeedSource, limit: Optional[int] = None):
        """
        Initialize aggregator with a feed source.

        Args:
            source: Feed source to aggregate
            limit: Optional maximum number of entries to read
        """
        self.source = source
        self.identifier = source.url
        self.limit = limit
        self.logger = logging.getLogger(f"core.aggregators.{self.get_aggregator_type()}")

    def aggregate(self) -> List[Dict[str, Any]]:
        """
        Fetch and aggregate articles from the source.

        Returns:
            List of article dictionaries with keys:
                - id: Stable article id
                - title: Article title
                - url: Article link
                - snippet: Plain text preview
                - content: Sanitized content from the feed (may be empty)
                - source: Source name
                - sourceUrl: Feed URL
                - publicationDatetime: ISO 8601 date in UTC
        """
        self.validate()
        source_data = self.fetch_source_data(self.limit)
        articles = self.parse_to_raw_articles(source_data)
        articles = self.filter_articles(articles)
        return self.finalize_articles(articles)

    def validate(self) -> None:
        """
        Validate source configuration.

        Raises ValidationError if validation fails.
        """
        if not self.identifier:
            raise ValidationError("Feed URL is required")

        parsed = urlparse(self.identifier)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(f"Invalid feed URL: {self.identifier}")

    @abstractmethod
    def fetch_source_data(self, limit: Optional[int] = None) -> Any:
        """
        Fetch raw source data (RSS feed, API, etc.).

        Must be implemented by subclasses.

        Args:
            limit: Optional limit on number of items to fetch

        Returns:
            Raw source data in implementation-specific format
        """
        pass

    @abstractmethod
    def parse_to_raw_articles(self, source_data: Any) -> List[Dict[str, Any]]:
        """
        Parse source data to raw article dictionaries.

        Must be implemented by subclasses.

        Args:
            source_data: Raw source data from fetch_source_data()

        Returns:
            List of article dictionaries with basic fields populated
        """
        pass

    def filter_articles(self, articles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Drop incomplete and duplicate articles.

        An article needs a link, a title, a snippet and a publication date.

        Args:
            articles: List of article dictionaries

        Returns:
            Filtered list of articles
        """
        filtered = []
        seen_ids = set()

        for article in articles:
            missing = [field for field in REQUIRED_FIELDS if not article.get(field)]
            if missing:
                self.logger.debug(
                    f"[filter_articles] Skipping '{article.get('title') or article.get('url')}': "
                    f"missing {', '.join(missing)}"
                )
                continue

            if article["id"] in seen_ids:
                self.logger.debug(f"[filter_articles] Skipping duplicate: {article['url']}")
                continue

            seen_ids.add(article["id"])
            filtered.append(article)

        self.logger.info(
            f"[filter_articles] Kept {len(filtered)}/{len(articles)} articles from {self.source.name}"
        )
        return filtered

    def finalize_articles(self, articles: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Final processing before returning articles.

        Override for custom finalization.

        Args:
            articles: List of article dictionaries

        Returns:
            Finalized list of articles
        """
        return articles

    def get_aggregator_type(self) -> str:
        """Get the aggregator type name."""
        return self.__class__.__name__.replace("Aggregator", "").lower()

    def get_source_url(self) -> str:
        """
        Get the source URL for this feed.

        Default implementation returns the feed URL.
        """
        return self.identifier or ""
