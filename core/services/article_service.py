"""Service for looking up articles and extracting their content."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from ..aggregators.exceptions import ArticleNotFoundError, ValidationError
from ..aggregators.services import config
from ..aggregators.services.content_extraction import ContentExtractor, ExtractionContext
from ..aggregators.utils.content_formatter import format_article_content
from ..aggregators.utils.feed_entries import make_article_id
from ..aggregators.utils.snippet import text_length
from .cache_service import ArticleCache

logger = logging.getLogger(__name__)


def validate_article_url(url: Optional[str]) -> str:
    """
    Check that a URL can be fetched.

    Raises:
        ValidationError: If the URL is missing or not http(s)
    """
    url = (url or "").strip()
    if not url:
        raise ValidationError("Missing url parameter")

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(f"Invalid URL: {url}")
    return url


class ArticleService:
    """Service for article lookup and content extraction."""

    @staticmethod
    def get_article(article_id: str, cache: Optional[ArticleCache] = None) -> Dict[str, Any]:
        """
        Full cached article.

        Raises:
            ArticleNotFoundError: If the id is not in the cache
        """
        cache = cache or ArticleCache()
        article = cache.get_article(article_id)
        if article is None:
            raise ArticleNotFoundError(f"Article not found: {article_id}")
        return article

    @staticmethod
    def get_content(
        url: str,
        feed_url: Optional[str] = None,
        snippet: str = "",
        article_id: Optional[str] = None,
        title: str = "",
        force: bool = False,
        cache: Optional[ArticleCache] = None,
    ) -> Dict[str, Any]:
        """
        Extract the readable content of an article, cache first.

        Args:
            url: Article URL
            feed_url: Feed the article was listed in, enables the feed strategy
            snippet: Known preview text, used when everything else fails
            article_id: Cache id, derived from the URL when omitted
            title: Article title
            force: Ignore a cached result
            cache: Article cache

        Returns:
            Dictionary with content, strategy, url, title and imageUrl

        Raises:
            ValidationError: If the URL is not http(s)
            ContentUnavailableError: If no strategy produced content
        """
        url = validate_article_url(url)
        cache = cache or ArticleCache()
        article_id = article_id or make_article_id(url)

        if not force:
            cached = cache.get_content(article_id)
            if cached:
                logger.debug(f"Content cache hit for {url}")
                return cached

        context = ExtractionContext(url=url, feed_url=feed_url, snippet=snippet, title=title)
        result = ContentExtractor().extract(context).to_dict()

        cache.put_content(article_id, result)
        logger.info(f"Extracted content for {url} using {result['strategy']}")
        return result

    @staticmethod
    def get_article_content(
        article_id: str, force: bool = False, cache: Optional[ArticleCache] = None
    ) -> Dict[str, Any]:
        """
        Content of a cached article.

        Content that came with the feed is used directly when it is long
        enough; otherwise the extraction pipeline runs with the article's
        feed and snippet.

        Raises:
            ArticleNotFoundError: If the id is not in the cache
            ContentUnavailableError: If no strategy produced content
        """
        cache = cache or ArticleCache()
        article = ArticleService.get_article(article_id, cache=cache)

        feed_content = article.get("content") or ""
        if not force and text_length(feed_content) >= config.MIN_CONTENT_LENGTH:
            return {
                "content": format_article_content(
                    feed_content, article.get("title", ""), article["url"]
                ),
                "strategy": "feed",
                "url": article["url"],
                "title": article.get("title", ""),
                "imageUrl": None,
            }

        return ArticleService.get_content(
            article["url"],
            feed_url=article.get("sourceUrl"),
            snippet=article.get("snippet", ""),
            article_id=article_id,
            title=article.get("title", ""),
            force=force,
            cache=cache,
        )
