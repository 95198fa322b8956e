"""Core application views."""

from .articles import (
    article_content_view,
    article_view,
    articles_view,
    content_view,
    refresh_status_view,
)
from .default import health_check

__all__ = [
    "health_check",
    "articles_view",
    "article_view",
    "article_content_view",
    "content_view",
    "refresh_status_view",
]
