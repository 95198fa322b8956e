"""
Configuration for aggregator services.

Centralized configuration for feed sources, HTTP requests, caching and
content extraction. Settings can be overridden via Django settings
(NEWSGLANCE_* variables).
"""

from django.conf import settings

# ==================== Feed Sources ====================

FEED_SOURCES = getattr(settings, "NEWSGLANCE_FEED_SOURCES", [])

# ==================== Cache Settings ====================

# Age in seconds after which the cached article list is refreshed
REFRESH_INTERVAL = getattr(settings, "NEWSGLANCE_REFRESH_INTERVAL", 15 * 60)

# Lifetime of an extracted article body in the cache
CONTENT_CACHE_TTL = getattr(settings, "NEWSGLANCE_CONTENT_CACHE_TTL", 24 * 3600)

# ==================== HTTP Settings ====================

# Request timeout in seconds
HTTP_TIMEOUT = getattr(settings, "NEWSGLANCE_HTTP_TIMEOUT", 15)

# Attempts per request (including the first one)
HTTP_RETRIES = getattr(settings, "NEWSGLANCE_HTTP_RETRIES", 3)

# User-Agent header for HTTP requests
USER_AGENT = getattr(
    settings,
    "NEWSGLANCE_USER_AGENT",
    "Mozilla/5.0 (compatible; NewsGlanceBot/1.0; +https://github.com/newsglance/newsglance)",
)

# ==================== Content Settings ====================

# Maximum snippet length in characters (ellipsis excluded)
SNIPPET_LENGTH = getattr(settings, "NEWSGLANCE_SNIPPET_LENGTH", 150)

# Minimum visible text for feed or page content to count as a full article
MIN_CONTENT_LENGTH = getattr(settings, "NEWSGLANCE_MIN_CONTENT_LENGTH", 200)

# Extra CSS selectors removed from extracted web pages, e.g. [".ads", "#newsletter"]
REMOVE_SELECTORS = getattr(settings, "NEWSGLANCE_REMOVE_SELECTORS", [])
