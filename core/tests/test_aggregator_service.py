from datetime import datetime, timezone
from unittest.mock import patch

import pytest
import requests

from core.aggregators.exceptions import RefreshStatusUnavailableError
from core.aggregators.utils.rss_parser import parse_feed_document
from core.services.aggregator_service import AggregatorService, next_refresh_after


def _article(article_id, published, source="Example Feed"):
    return {
        "id": article_id,
        "title": f"Article {article_id}",
        "url": f"https://example.com/{article_id}",
        "snippet": "Snippet",
        "content": f"<p>Content {article_id}</p>",
        "source": source,
        "sourceUrl": "https://example.com/feed.xml",
        "publicationDatetime": published,
    }


class TestRefreshArticles:
    @patch("core.services.aggregator_service.AggregatorService.aggregate_source")
    def test_refresh_stores_list_and_articles(self, mock_aggregate, article_cache):
        mock_aggregate.side_effect = [
            [_article("old", "2024-01-01T00:00:00.000Z"), _article("new", "2024-01-03T00:00:00.000Z")],
            [_article("mid", "2024-01-02T00:00:00.000Z", source="Other Feed")],
        ]

        result = AggregatorService.refresh_articles(cache=article_cache)

        assert result == {
            "success": True,
            "articles_count": 3,
            "failed_sources": [],
            "error": None,
        }
        listed = article_cache.get_list()
        assert [a["id"] for a in listed] == ["new", "mid", "old"]
        assert all("content" not in a for a in listed)
        assert article_cache.get_article("mid")["content"] == "<p>Content mid</p>"
        assert article_cache.get_last_update() is not None
        assert article_cache.get_error() == ""

    @patch("core.services.aggregator_service.AggregatorService.aggregate_source")
    def test_failed_source_does_not_stop_others(self, mock_aggregate, article_cache):
        mock_aggregate.side_effect = [
            requests.ConnectionError("down"),
            [_article("a", "2024-01-02T00:00:00.000Z", source="Other Feed")],
        ]

        result = AggregatorService.refresh_articles(cache=article_cache)

        assert result["success"] is False
        assert result["failed_sources"] == ["Example Feed"]
        assert result["error"] == "Failed to fetch Example Feed."
        assert [a["id"] for a in article_cache.get_list()] == ["a"]
        assert article_cache.get_error() == "Failed to fetch Example Feed."

    @patch("core.services.aggregator_service.AggregatorService.aggregate_source")
    def test_all_sources_fail_keeps_previous_list(self, mock_aggregate, article_cache):
        article_cache.put_list([{"id": "previous"}])
        mock_aggregate.side_effect = Exception("boom")

        result = AggregatorService.refresh_articles(cache=article_cache)

        assert result["articles_count"] == 1
        assert result["error"] == "Failed to fetch Example Feed. Failed to fetch Other Feed."
        assert article_cache.get_list() == [{"id": "previous"}]
        assert article_cache.get_last_update() is not None

    @patch("core.services.aggregator_service.AggregatorService.aggregate_source")
    def test_duplicates_across_sources(self, mock_aggregate, article_cache):
        mock_aggregate.side_effect = [
            [_article("same", "2024-01-01T00:00:00.000Z")],
            [_article("same", "2024-01-01T00:00:00.000Z", source="Other Feed")],
        ]

        AggregatorService.refresh_articles(cache=article_cache)

        assert len(article_cache.get_list()) == 1

    @patch("core.aggregators.rss.parse_rss_feed")
    def test_end_to_end_with_feeds(self, mock_parse, article_cache, rss_feed_text, atom_feed_text):
        feeds = {
            "https://example.com/feed.xml": parse_feed_document(rss_feed_text),
            "https://other.example.org/atom.xml": parse_feed_document(atom_feed_text),
        }
        mock_parse.side_effect = lambda url: feeds[url]

        result = AggregatorService.refresh_articles(cache=article_cache)

        assert result["articles_count"] == 3
        titles = [a["title"] for a in article_cache.get_list()]
        assert titles == ["Atom Entry", "Full Content Article", "Summary Only Article"]


class TestGetArticles:
    def test_no_list(self, article_cache):
        article_cache.set_last_update()

        assert AggregatorService.get_articles(cache=article_cache) == {
            "articles": [],
            "error": "No articles found",
        }

    @patch("core.services.aggregator_service.AggregatorService.refresh_articles")
    def test_fresh_cache_not_refreshed(self, mock_refresh, article_cache):
        article_cache.put_list([{"id": "a"}])
        article_cache.set_last_update()

        assert AggregatorService.get_articles(cache=article_cache) == {"articles": [{"id": "a"}]}
        mock_refresh.assert_not_called()

    @patch("core.services.aggregator_service.AggregatorService.refresh_articles")
    def test_stale_cache_refreshed(self, mock_refresh, article_cache):
        AggregatorService.get_articles(cache=article_cache)
        mock_refresh.assert_called_once_with(cache=article_cache)

    @patch("core.services.aggregator_service.AggregatorService.refresh_articles")
    def test_force(self, mock_refresh, article_cache):
        article_cache.set_last_update()
        AggregatorService.get_articles(force=True, cache=article_cache)
        mock_refresh.assert_called_once()

    def test_error_included(self, article_cache):
        article_cache.put_list([])
        article_cache.set_last_update()
        article_cache.set_error("Failed to fetch X.")

        assert AggregatorService.get_articles(cache=article_cache) == {
            "articles": [],
            "error": "Failed to fetch X.",
        }


class TestRefreshStatus:
    def test_never_refreshed(self, article_cache):
        with pytest.raises(RefreshStatusUnavailableError):
            AggregatorService.refresh_status(cache=article_cache)

    def test_corrupt_value(self, article_cache):
        article_cache.cache.set("last_update", "garbage")

        with pytest.raises(ValueError):
            AggregatorService.refresh_status(cache=article_cache)

    def test_out_of_range_value(self, article_cache):
        article_cache.cache.set("last_update", 10**20)

        with pytest.raises(ValueError):
            AggregatorService.refresh_status(cache=article_cache)

    def test_status(self, article_cache):
        # 2024-01-02T10:12:34Z
        article_cache.set_last_update(datetime(2024, 1, 2, 10, 12, 34, tzinfo=timezone.utc).timestamp())

        assert AggregatorService.refresh_status(cache=article_cache) == {
            "lastUpdate": "2024-01-02T10:12:34.000Z",
            "nextRefresh": "2024-01-02T10:30:00.000Z",
        }

    @pytest.mark.parametrize(
        "last_update,expected",
        [
            (datetime(2024, 1, 2, 10, 0, 0), datetime(2024, 1, 2, 10, 30)),
            (datetime(2024, 1, 2, 10, 29, 59), datetime(2024, 1, 2, 10, 30)),
            (datetime(2024, 1, 2, 10, 30, 0), datetime(2024, 1, 2, 11, 0)),
            (datetime(2024, 1, 2, 23, 45, 10), datetime(2024, 1, 3, 0, 0)),
        ],
    )
    def test_next_refresh_after(self, last_update, expected):
        assert next_refresh_after(last_update) == expected
