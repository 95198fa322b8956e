"""
Services package.
"""

from .aggregator_service import AggregatorService
from .article_service import ArticleService
from .cache_service import ArticleCache

__all__ = ["AggregatorService", "ArticleService", "ArticleCache"]
