"""Article content extraction using a chain of strategies."""

from .context import ExtractedContent, ExtractionContext
from .extractor import ContentExtractor

__all__ = ["ContentExtractor", "ExtractionContext", "ExtractedContent"]
