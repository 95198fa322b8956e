"""Service for refreshing the cached article list."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from ..aggregators import RssAggregator, get_feed_sources
from ..aggregators.exceptions import RefreshStatusUnavailableError
from ..aggregators.sources import FeedSource
from ..aggregators.utils.feed_entries import format_iso_datetime, parse_date_string
from .cache_service import ArticleCache

logger = logging.getLogger(__name__)

NO_ARTICLES_ERROR = "No articles found"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _publication_sort_key(article: Dict[str, Any]) -> datetime:
    return parse_date_string(article.get("publicationDatetime") or "") or _EPOCH


def next_refresh_after(last_update: datetime) -> datetime:
    """
    Next scheduled refresh after a refresh at last_update.

    Refreshes run on the hour and on the half hour.
    """
    if last_update.minute < 30:
        return last_update.replace(minute=30, second=0, microsecond=0)
    return last_update.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)


class AggregatorService:
    """Service for running the aggregators and serving the cached list."""

    @staticmethod
    def aggregate_source(source: FeedSource) -> List[Dict[str, Any]]:
        """
        Run the aggregator for a single feed source.

        Raises:
            Exception: Whatever the fetch or parse step raised
        """
        aggregator = RssAggregator(source)
        return aggregator.aggregate()

    @staticmethod
    def refresh_articles(
        sources: Optional[List[FeedSource]] = None,
        cache: Optional[ArticleCache] = None,
    ) -> Dict[str, Any]:
        """
        Fetch every source and replace the cached article list.

        A failing source does not stop the others. If every source fails,
        the previously cached list is kept.

        Args:
            sources: Feed sources, defaults to NEWSGLANCE_FEED_SOURCES
            cache: Article cache, defaults to the default Django cache

        Returns:
            Dictionary with:
                - success: True if every source was fetched
                - articles_count: Number of articles in the list
                - failed_sources: Names of the sources that failed
                - error: Combined error message, or None
        """
        cache = cache or ArticleCache()
        if sources is None:
            sources = get_feed_sources()

        listed: List[Dict[str, Any]] = []
        seen_ids = set()
        failed_sources: List[str] = []

        for source in sources:
            try:
                articles = AggregatorService.aggregate_source(source)
            except Exception as e:
                logger.error(f"Failed to fetch {source.name} ({source.url}): {e}")
                failed_sources.append(source.name)
                continue

            cache.put_articles(articles)

            for article in articles:
                if article["id"] in seen_ids:
                    continue
                seen_ids.add(article["id"])
                listed.append({key: value for key, value in article.items() if key != "content"})

            logger.info(f"Fetched {len(articles)} articles from {source.name}")

        listed.sort(key=_publication_sort_key, reverse=True)

        error_message = " ".join(f"Failed to fetch {name}." for name in failed_sources)

        if sources and len(failed_sources) == len(sources):
            logger.warning("All sources failed, keeping the previous article list")
            previous = cache.get_list()
            articles_count = len(previous) if previous is not None else 0
        else:
            cache.put_list(listed)
            articles_count = len(listed)

        cache.set_last_update()
        cache.set_error(error_message)

        logger.info(
            f"Refresh finished: {articles_count} articles, "
            f"{len(failed_sources)}/{len(sources)} sources failed"
        )

        return {
            "success": not failed_sources,
            "articles_count": articles_count,
            "failed_sources": failed_sources,
            "error": error_message or None,
        }

    @staticmethod
    def get_articles(force: bool = False, cache: Optional[ArticleCache] = None) -> Dict[str, Any]:
        """
        Article list payload, refreshed first when stale or forced.

        Returns:
            {"articles": [...]} plus "error" when the last refresh had failures
            or no list was ever stored
        """
        cache = cache or ArticleCache()

        if force or cache.is_stale():
            AggregatorService.refresh_articles(cache=cache)

        articles = cache.get_list()
        if articles is None:
            return {"articles": [], "error": NO_ARTICLES_ERROR}

        payload: Dict[str, Any] = {"articles": articles}
        error = cache.get_error()
        if error:
            payload["error"] = error
        return payload

    @staticmethod
    def refresh_status(cache: Optional[ArticleCache] = None) -> Dict[str, str]:
        """
        Time of the last refresh and of the next scheduled one.

        Returns:
            Dictionary with ISO 8601 "lastUpdate" and "nextRefresh"

        Raises:
            RefreshStatusUnavailableError: If the list was never refreshed
            ValueError: If the stored timestamp is invalid
        """
        cache = cache or ArticleCache()

        timestamp = cache.get_last_update()
        if timestamp is None:
            raise RefreshStatusUnavailableError("No update information available")

        try:
            last_update = datetime.fromtimestamp(timestamp, tz=timezone.utc)
            next_refresh = next_refresh_after(last_update)
        except (OverflowError, OSError) as e:
            # Outside the platform time_t range
            raise ValueError(f"Invalid last update timestamp: {timestamp}") from e

        return {
            "lastUpdate": format_iso_datetime(last_update),
            "nextRefresh": format_iso_datetime(next_refresh),
        }
