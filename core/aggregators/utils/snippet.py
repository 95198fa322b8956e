"""Snippet formatting for article list previews."""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from ..services import config

logger = logging.getLogger(__name__)

ELLIPSIS = "…"

SNIPPET_UNAVAILABLE = "Snippet unavailable"

# Elements whose text never belongs in a preview
SNIPPET_EXCLUDED_TAGS = [
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "aside",
    "iframe",
    "noscript",
    "svg",
    "form",
    "button",
]


def _truncate(text: str, max_length: int) -> str:
    if len(text) > max_length:
        return f"{text[:max_length]}{ELLIPSIS}"
    return text


def format_snippet(html_content: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Turn an HTML excerpt into a short plain text preview.

    Drops script/style/navigation elements, collapses whitespace and cuts
    the text at max_length characters, appending an ellipsis when cut.

    Args:
        html_content: Description or summary HTML (plain text works too)
        max_length: Maximum length before the ellipsis

    Returns:
        Plain text snippet
    """
    if max_length is None:
        max_length = config.SNIPPET_LENGTH

    if not html_content:
        return ""

    try:
        # Wrap in div in case the snippet is just text or inline elements
        soup = BeautifulSoup(f"<div>{html_content}</div>", "html.parser")
        for elem in soup.find_all(SNIPPET_EXCLUDED_TAGS):
            elem.decompose()
        text = " ".join(soup.get_text().split())
        return _truncate(text, max_length)

    except Exception as e:
        logger.warning(f"Error formatting snippet with BeautifulSoup: {e}")

    # Fallback to a simpler regex method if parsing fails
    try:
        stripped = re.sub(r"<[^>]*>?", "", html_content)
        clean_text = " ".join(stripped.split())
        return _truncate(clean_text, max_length)
    except Exception as e:
        logger.error(f"Error in fallback snippet formatting: {e}")
        return SNIPPET_UNAVAILABLE


def text_length(html_content: Optional[str]) -> int:
    """Number of visible text characters in an HTML fragment."""
    if not html_content:
        return 0
    soup = BeautifulSoup(html_content, "html.parser")
    for elem in soup.find_all(["script", "style", "noscript"]):
        elem.decompose()
    return len(" ".join(soup.get_text(" ").split()))
