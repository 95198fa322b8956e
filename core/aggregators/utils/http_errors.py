"""
HTTP error detection utilities.

Detects client errors in requests library exceptions.
"""

from typing import Optional


def is_4xx_error(error: Exception) -> Optional[int]:
    """
    Check if an error is a 4xx HTTP error.

    4xx errors indicate client errors and should result in ArticleSkipError.

    Args:
        error: Exception to check

    Returns:
        HTTP status code (400-499) if 4xx error, None otherwise
    """
    response = getattr(error, "response", None)
    if response is not None:
        status_code = getattr(response, "status_code", None)
        if isinstance(status_code, int) and 400 <= status_code < 500:
            return status_code

    return None
