"""Content formatting utilities."""

import html
from typing import Optional


def format_article_content(
    content: str,
    title: str,
    url: str,
    header_image_url: Optional[str] = None,
) -> str:
    """
    Format article content with an optional header image, the main content, and a footer.

    Note: Title, source, and date are NOT added to the content as these
    are shown by the front end next to it.

    Args:
        content: Main article content HTML (already sanitized)
        title: Article title (used for image alt text)
        url: Article URL (used for footer source link)
        header_image_url: Optional URL of a header image

    Returns:
        Formatted HTML string
    """
    parts = []

    if header_image_url:
        parts.append(
            "\n".join(
                [
                    '<header data-sanitized-class="article-header">',
                    f'<img src="{html.escape(header_image_url)}" alt="{html.escape(title or "")}">',
                    "</header>",
                ]
            )
        )

    # Main content section
    parts.append(f'<section data-sanitized-class="article-content">{content}</section>')

    # Footer section
    if url:
        safe_url = html.escape(url)
        parts.append(
            f'<footer><p>Source: <a href="{safe_url}" target="_blank" '
            f'rel="noopener noreferrer">{safe_url}</a></p></footer>'
        )

    return "\n\n".join(parts)
