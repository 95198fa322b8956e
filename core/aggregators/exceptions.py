"""
Aggregator exceptions.

Custom exceptions used throughout feed aggregation and content extraction
for error handling and pipeline flow control.
"""


class AggregatorError(Exception):
    """Base exception for all aggregator errors."""

    pass


class ArticleSkipError(AggregatorError):
    """
    Exception indicating that an article page should not be used.

    Thrown when a 4xx HTTP error is encountered while fetching an article page.
    The page is not retried; content extraction falls through to the next strategy.

    Attributes:
        message: Error description
        status_code: HTTP status code (4xx)
        original_error: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        original_error: Exception = None,
    ):
        """
        Initialize ArticleSkipError.

        Args:
            message: Human-readable error message
            status_code: HTTP status code (typically 4xx)
            original_error: Original exception for context
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.original_error = original_error

    def __str__(self):
        return f"{self.status_code}: {self.message}"


class ParseError(AggregatorError):
    """Exception raised when parsing fails."""

    pass


class ValidationError(AggregatorError):
    """Exception raised when validation fails."""

    pass


class ArticleNotFoundError(AggregatorError):
    """Exception raised when an article id is not in the cache."""

    pass


class ContentUnavailableError(AggregatorError):
    """Exception raised when no extraction strategy produced any content."""

    pass


class RefreshStatusUnavailableError(AggregatorError):
    """Exception raised when the article list was never refreshed."""

    pass
