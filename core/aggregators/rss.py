"""RSS aggregator."""

from typing import Any, Dict, List, Optional

from .base import BaseAggregator
from .utils import (
    entry_content,
    entry_date,
    entry_summary,
    format_iso_datetime,
    format_snippet,
    make_article_id,
    parse_rss_feed,
    sanitize_html,
)
from .utils.feed_entries import entry_links


class RssAggregator(BaseAggregator):
    """Aggregator for RSS 0.9x/2.0, RSS 1.0 (RDF) and Atom feeds."""

    def fetch_source_data(self, limit: Optional[int] = None) -> Dict[str, Any]:
        """Fetch RSS feed data."""
        self.logger.info(f"Fetching RSS feed: {self.identifier}")
        data = parse_rss_feed(self.identifier)

        if limit:
            data["entries"] = data["entries"][:limit]

        return data

    def parse_to_raw_articles(self, source_data: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Parse RSS feed items to article dictionaries."""
        articles = []

        for entry in source_data.get("entries", []):
            links = entry_links(entry)
            link = links[0].strip() if links else ""

            summary = entry_summary(entry)
            content = entry_content(entry)
            date = entry_date(entry)

            articles.append(
                {
                    "id": make_article_id(link) if link else "",
                    "title": " ".join((entry.get("title") or "").split()),
                    "url": link,
                    # Feeds without a description still get a preview from the content
                    "snippet": format_snippet(summary or content),
                    "content": sanitize_html(content, base_url=link or None) if content else "",
                    "source": self.source.name,
                    "sourceUrl": self.get_source_url(),
                    "publicationDatetime": format_iso_datetime(date) if date else None,
                }
            )

        return articles
