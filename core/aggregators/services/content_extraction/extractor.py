"""
Content extraction orchestrator.

Coordinates the content extraction strategies in a chain of responsibility.
Tries the feed first, then the web page, then the snippet.
"""

import logging
from typing import List, Optional

from ...exceptions import ArticleSkipError, ContentUnavailableError
from .context import ExtractedContent, ExtractionContext
from .strategies import (
    ExtractionStrategy,
    FeedEntryStrategy,
    SnippetStrategy,
    WebPageStrategy,
)

logger = logging.getLogger(__name__)


class ContentExtractor:
    """
    Main orchestrator for article content extraction.

    Uses strategy pattern to try multiple extraction methods:
    1. FeedEntryStrategy - Content embedded in the feed entry
    2. WebPageStrategy - Heuristic extraction from the article page
    3. SnippetStrategy - Fallback to the preview text

    FeedEntryStrategy must run first: it also records the entry summary
    that SnippetStrategy falls back on.
    """

    def __init__(self, strategies: Optional[List[ExtractionStrategy]] = None):
        self.strategies: List[ExtractionStrategy] = strategies or [
            FeedEntryStrategy(),
            WebPageStrategy(),
            SnippetStrategy(),  # Must be last (fallback)
        ]

    def extract(self, context: ExtractionContext) -> ExtractedContent:
        """
        Extract article content using the strategy chain.

        Args:
            context: Article URL, feed URL and known snippet

        Returns:
            ExtractedContent of the first strategy that succeeded

        Raises:
            ContentUnavailableError: If no strategy produced content
        """
        logger.debug(f"ContentExtractor: Starting extraction for {context.url}")

        errors = []

        for strategy in self.strategies:
            strategy_name = strategy.__class__.__name__

            if not strategy.can_handle(context):
                logger.debug(f"ContentExtractor: {strategy_name} cannot handle context")
                continue

            logger.debug(f"ContentExtractor: Trying {strategy_name}")

            try:
                result = strategy.create(context)

                if result:
                    logger.debug(f"ContentExtractor: Success with {strategy_name}")
                    return result

                logger.debug(f"ContentExtractor: {strategy_name} returned None")

            except ArticleSkipError as e:
                # The page itself is unusable, remaining strategies may still work
                logger.warning(f"ContentExtractor: {strategy_name} raised ArticleSkipError: {e}")
                errors.append(str(e))

            except Exception as e:
                logger.warning(f"ContentExtractor: {strategy_name} raised exception: {e}")
                errors.append(str(e))

        logger.info(f"ContentExtractor: All strategies failed for {context.url}")
        detail = f" ({'; '.join(errors)})" if errors else ""
        raise ContentUnavailableError(f"Could not extract content for {context.url}{detail}")
