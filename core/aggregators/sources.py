"""Configured feed sources."""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .services import config


@dataclass(frozen=True)
class FeedSource:
    """A feed the service aggregates."""

    name: str
    url: str

    @classmethod
    def from_config(cls, entry: Dict[str, Any]) -> "FeedSource":
        """
        Build a source from a settings entry.

        Raises:
            ValueError: If the entry has no URL
        """
        url = (entry.get("url") or "").strip()
        if not url:
            raise ValueError(f"Feed source without URL: {entry!r}")
        return cls(name=(entry.get("name") or url).strip(), url=url)


def get_feed_sources(entries: Optional[List[Dict[str, Any]]] = None) -> List[FeedSource]:
    """Feed sources from NEWSGLANCE_FEED_SOURCES (or the given entries)."""
    if entries is None:
        entries = config.FEED_SOURCES
    return [FeedSource.from_config(entry) for entry in entries]
