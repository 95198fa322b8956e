"""
Django settings for the newsglance project.

All project specific options are prefixed with NEWSGLANCE_ and can be set
through environment variables of the same name.
"""

import json
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-newsglance-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "false").lower() in ("1", "true", "yes")

ALLOWED_HOSTS = [
    host.strip() for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",") if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "core",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "newsglance.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

WSGI_APPLICATION = "newsglance.wsgi.application"

# No models: articles live in the cache below, so no database is configured.
DATABASES = {}

# The article cache is the key-value store. The file based backend keeps it
# across restarts; point NEWSGLANCE_CACHE_BACKEND at any Django cache backend
# (Redis, Memcached, database) to share it between workers.
CACHES = {
    "default": {
        "BACKEND": os.environ.get(
            "NEWSGLANCE_CACHE_BACKEND", "django.core.cache.backends.filebased.FileBasedCache"
        ),
        "LOCATION": os.environ.get("NEWSGLANCE_CACHE_LOCATION", str(BASE_DIR / "data" / "cache")),
        "TIMEOUT": None,
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

APPEND_SLASH = False

# ==================== Logging ====================

LOG_LEVEL = os.environ.get("NEWSGLANCE_LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{asctime} [{levelname}] {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "core": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO").upper(),
            "propagate": False,
        },
    },
}

# ==================== newsglance ====================

_DEFAULT_FEED_SOURCES = [
    {"name": "Hacker News", "url": "https://hnrss.org/newest"},
    {"name": "TypeScript Blog", "url": "https://devblogs.microsoft.com/typescript/feed/"},
]

# JSON list of {"name": ..., "url": ...} objects
NEWSGLANCE_FEED_SOURCES = (
    json.loads(os.environ["NEWSGLANCE_FEED_SOURCES"])
    if os.environ.get("NEWSGLANCE_FEED_SOURCES")
    else _DEFAULT_FEED_SOURCES
)

NEWSGLANCE_REFRESH_INTERVAL = int(os.environ.get("NEWSGLANCE_REFRESH_INTERVAL", 15 * 60))
NEWSGLANCE_CONTENT_CACHE_TTL = int(os.environ.get("NEWSGLANCE_CONTENT_CACHE_TTL", 24 * 3600))
NEWSGLANCE_HTTP_TIMEOUT = int(os.environ.get("NEWSGLANCE_HTTP_TIMEOUT", 15))
NEWSGLANCE_HTTP_RETRIES = int(os.environ.get("NEWSGLANCE_HTTP_RETRIES", 3))
NEWSGLANCE_SNIPPET_LENGTH = int(os.environ.get("NEWSGLANCE_SNIPPET_LENGTH", 150))
NEWSGLANCE_MIN_CONTENT_LENGTH = int(os.environ.get("NEWSGLANCE_MIN_CONTENT_LENGTH", 200))

# Comma separated, e.g. ".ads, .sidebar, #newsletter"
NEWSGLANCE_REMOVE_SELECTORS = [
    selector.strip()
    for selector in os.environ.get("NEWSGLANCE_REMOVE_SELECTORS", "").split(",")
    if selector.strip()
]

if os.environ.get("NEWSGLANCE_USER_AGENT"):
    NEWSGLANCE_USER_AGENT = os.environ["NEWSGLANCE_USER_AGENT"]
