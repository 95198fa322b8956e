"""Feed aggregators."""

from .base import BaseAggregator
from .rss import RssAggregator
from .sources import FeedSource, get_feed_sources

__all__ = ["BaseAggregator", "RssAggregator", "FeedSource", "get_feed_sources"]
