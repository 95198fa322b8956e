"""HTML fetching utilities with retry logic."""

import logging
import time
from typing import Optional

import requests

from ..services import config
from .http_errors import is_4xx_error

logger = logging.getLogger(__name__)

USER_AGENT = config.USER_AGENT

FEED_ACCEPT = (
    "application/rss+xml,application/atom+xml,application/rdf+xml,"
    "application/xml;q=0.9,text/xml;q=0.9,*/*;q=0.8"
)


def _request(url: str, accept: str, timeout: int, retries: int) -> requests.Response:
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": accept,
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
    }

    # At least one attempt, even when retries is configured as 0
    retries = max(1, retries)
    last_exception = None

    for attempt in range(retries):
        try:
            response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
            response.raise_for_status()
            return response

        except requests.RequestException as e:
            last_exception = e
            # Client errors will not go away on retry
            if is_4xx_error(e):
                raise
            if attempt < retries - 1:
                wait_time = 2**attempt  # Exponential backoff
                logger.debug(f"Retrying {url} in {wait_time}s after error: {e}")
                time.sleep(wait_time)
            continue

    raise last_exception


def fetch_html(url: str, timeout: Optional[int] = None, retries: Optional[int] = None) -> str:
    """
    Fetch HTML content from URL with retry logic.

    Args:
        url: URL to fetch
        timeout: Request timeout in seconds
        retries: Number of attempts

    Returns:
        HTML content as string

    Raises:
        requests.RequestException: If fetch fails after retries, or immediately on 4xx
    """
    response = _request(
        url,
        accept="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        timeout=timeout or config.HTTP_TIMEOUT,
        retries=retries or config.HTTP_RETRIES,
    )
    return response.text


def fetch_feed_text(url: str, timeout: Optional[int] = None, retries: Optional[int] = None) -> bytes:
    """
    Fetch a feed document.

    Returns raw bytes so the XML declaration decides the encoding.
    """
    response = _request(
        url,
        accept=FEED_ACCEPT,
        timeout=timeout or config.HTTP_TIMEOUT,
        retries=retries or config.HTTP_RETRIES,
    )
    return response.content
