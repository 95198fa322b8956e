"""
Article cache on top of Django's cache framework.

Keys:
    articles_list   list of articles without content, newest first
    article:<id>    full article including feed content
    content:<id>    extracted article body (expires after CONTENT_CACHE_TTL)
    last_update     Unix timestamp (seconds) of the last refresh
    refresh_error   error message of the last refresh, empty on success
"""

import logging
import time
from typing import Any, Dict, List, Optional

from django.core.cache import caches

from ..aggregators.services import config

logger = logging.getLogger(__name__)

ARTICLES_LIST_KEY = "articles_list"
LAST_UPDATE_KEY = "last_update"
REFRESH_ERROR_KEY = "refresh_error"


def article_key(article_id: str) -> str:
    return f"article:{article_id}"


def content_key(article_id: str) -> str:
    return f"content:{article_id}"


class ArticleCache:
    """Typed access to the article entries in a Django cache."""

    def __init__(self, cache=None, alias: str = "default"):
        self.cache = cache if cache is not None else caches[alias]

    # ==================== Article list ====================

    def get_list(self) -> Optional[List[Dict[str, Any]]]:
        return self.cache.get(ARTICLES_LIST_KEY)

    def put_list(self, articles: List[Dict[str, Any]]) -> None:
        # The list never expires, it is replaced on refresh
        self.cache.set(ARTICLES_LIST_KEY, articles, timeout=None)

    # ==================== Articles ====================

    def get_article(self, article_id: str) -> Optional[Dict[str, Any]]:
        return self.cache.get(article_key(article_id))

    def put_article(self, article: Dict[str, Any]) -> None:
        self.cache.set(article_key(article["id"]), article, timeout=None)

    def put_articles(self, articles: List[Dict[str, Any]]) -> None:
        self.cache.set_many({article_key(a["id"]): a for a in articles}, timeout=None)

    # ==================== Extracted content ====================

    def get_content(self, article_id: str) -> Optional[Dict[str, Any]]:
        return self.cache.get(content_key(article_id))

    def put_content(
        self, article_id: str, content: Dict[str, Any], timeout: Optional[int] = None
    ) -> None:
        if timeout is None:
            timeout = config.CONTENT_CACHE_TTL
        self.cache.set(content_key(article_id), content, timeout=timeout)

    def delete_content(self, article_id: str) -> None:
        self.cache.delete(content_key(article_id))

    # ==================== Refresh state ====================

    def get_last_update(self) -> Optional[int]:
        """
        Timestamp of the last refresh in Unix seconds.

        Raises:
            ValueError: If the stored value is not a timestamp
        """
        value = self.cache.get(LAST_UPDATE_KEY)
        if value is None or value == "":
            return None
        return int(value)

    def set_last_update(self, timestamp: Optional[float] = None) -> int:
        if timestamp is None:
            timestamp = time.time()
        value = int(timestamp)
        self.cache.set(LAST_UPDATE_KEY, value, timeout=None)
        return value

    def get_error(self) -> str:
        return self.cache.get(REFRESH_ERROR_KEY) or ""

    def set_error(self, message: str) -> None:
        self.cache.set(REFRESH_ERROR_KEY, message or "", timeout=None)

    def is_stale(self, interval: Optional[int] = None, now: Optional[float] = None) -> bool:
        """
        Check whether the article list must be refreshed.

        A list that was never refreshed, or whose timestamp cannot be read,
        is stale.
        """
        if interval is None:
            interval = config.REFRESH_INTERVAL
        if now is None:
            now = time.time()

        try:
            last_update = self.get_last_update()
        except (TypeError, ValueError):
            logger.warning("Invalid last_update value in cache, treating list as stale")
            return True

        if last_update is None:
            return True
        return now - last_update > interval

    def ping(self) -> bool:
        """Write and read back a probe value."""
        self.cache.set("health_check", "ok", timeout=10)
        return self.cache.get("health_check") == "ok"
