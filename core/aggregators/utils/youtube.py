"""
YouTube utilities for article content.

Provides functions for:
- Detecting and extracting YouTube video IDs
- Pointing embedded players at the privacy-enhanced domain
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Tag

from .bs4_utils import get_attr_str

NOCOOKIE_EMBED_BASE = "https://www.youtube-nocookie.com/embed"


def extract_youtube_video_id(url: str) -> Optional[str]:
    """
    Extract YouTube video ID from various URL formats.

    Handles:
    - youtu.be/{ID}
    - youtube.com/watch?v={ID}
    - youtube.com/embed/{ID}
    - youtube-nocookie.com/embed/{ID}
    - youtube.com/v/{ID}
    - youtube.com/shorts/{ID}

    Args:
        url: YouTube URL in various formats

    Returns:
        Video ID if valid format found, None otherwise
    """
    if not url:
        return None

    patterns = [
        # youtu.be short URL
        r"youtu\.be/([A-Za-z0-9_-]+)",
        # youtube.com watch URL
        r"youtube\.com/watch\?(?:.*&)?v=([A-Za-z0-9_-]+)",
        # youtube.com and youtube-nocookie.com embed URL
        r"youtube(?:-nocookie)?\.com/embed/([A-Za-z0-9_-]+)",
        # youtube.com /v/ URL
        r"youtube\.com/v/([A-Za-z0-9_-]+)",
        # youtube.com shorts
        r"youtube\.com/shorts/([A-Za-z0-9_-]+)",
    ]

    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return match.group(1)

    return None


def is_youtube_url(url: str) -> bool:
    """
    Check if a URL is a YouTube URL.

    Args:
        url: URL to check

    Returns:
        True if URL is from youtube.com or youtu.be
    """
    if not url:
        return False

    youtube_domains = ["youtube.com", "youtu.be", "m.youtube.com", "youtube-nocookie.com"]
    return any(domain in url for domain in youtube_domains)


def nocookie_embed_url(video_id: str) -> str:
    """Embed URL on youtube-nocookie.com for a video."""
    return f"{NOCOOKIE_EMBED_BASE}/{video_id}"


def rewrite_youtube_embeds(soup: BeautifulSoup) -> None:
    """
    Keep YouTube iframes, pointed at youtube-nocookie.com, and drop all others.

    Args:
        soup: BeautifulSoup object to modify in-place
    """
    for iframe in soup.find_all("iframe"):
        if not isinstance(iframe, Tag):
            continue
        src = get_attr_str(iframe, "src")
        video_id = extract_youtube_video_id(src) if is_youtube_url(src) else None

        if not video_id:
            iframe.decompose()
            continue

        iframe.attrs = {
            "src": nocookie_embed_url(video_id),
            "title": get_attr_str(iframe, "title") or "YouTube video player",
            "width": "560",
            "height": "315",
            "allowfullscreen": "",
            "referrerpolicy": "strict-origin-when-cross-origin",
        }
