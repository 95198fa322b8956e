"""
Content extraction context.

Dataclasses for passing context to content extraction strategies.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractionContext:
    """Context for content extraction strategies."""

    url: str  # Article URL
    feed_url: Optional[str] = None  # Feed the article was listed in
    snippet: str = ""  # Known preview text, last resort
    title: str = ""  # Article title, used for image alt text

    # Set by FeedEntryStrategy when the entry has a summary but too little content
    feed_summary: str = ""


@dataclass
class ExtractedContent:
    """Data returned from content extraction strategies."""

    html: str  # Sanitized article HTML
    strategy: str  # "feed", "webpage" or "snippet"
    url: str  # Article URL
    title: str = ""
    image_url: Optional[str] = None  # Lead image, if the page declared one

    def to_dict(self) -> dict:
        return {
            "content": self.html,
            "strategy": self.strategy,
            "url": self.url,
            "title": self.title,
            "imageUrl": self.image_url,
        }
