"""BeautifulSoup utility functions for type-safe attribute and text access."""

from typing import Any


def get_attr_str(tag: Any, attr: str, default: str = "") -> str:
    """
    Get a tag attribute as a string, even if BeautifulSoup returns a list.

    Args:
        tag: BeautifulSoup Tag object
        attr: Attribute name
        default: Default value if attribute is missing

    Returns:
        Attribute value as a string
    """
    val = tag.get(attr)
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(val)
    return str(val)


def get_class_and_id(tag: Any) -> str:
    """
    Get the class names and id of a tag as one lower-cased string.

    Used to match content heuristics like "sidebar" or "article-body".

    Args:
        tag: BeautifulSoup Tag object

    Returns:
        Space separated class names followed by the id
    """
    if not getattr(tag, "attrs", None):
        return ""
    return f"{get_attr_str(tag, 'class')} {get_attr_str(tag, 'id')}".strip().lower()


def get_visible_text(tag: Any) -> str:
    """
    Get the text of a tag with whitespace collapsed.

    Args:
        tag: BeautifulSoup Tag object

    Returns:
        Text content on a single line
    """
    return " ".join(tag.get_text(" ", strip=True).split())
