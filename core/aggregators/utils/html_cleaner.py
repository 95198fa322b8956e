"""HTML cleaning and sanitization utilities."""

import re
from typing import List, Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, Tag

from .bs4_utils import get_attr_str
from .youtube import rewrite_youtube_embeds

# Elements that never belong in displayed article content
DANGEROUS_TAGS = [
    "script",
    "style",
    "object",
    "embed",
    "applet",
    "form",
    "input",
    "button",
    "select",
    "textarea",
    "link",
    "meta",
    "base",
    "noscript",
    "frame",
    "frameset",
    "svg",
    "template",
]

# Attributes that hold URLs
URL_ATTRIBUTES = ["href", "src", "poster", "action", "formaction", "xlink:href", "background"]

# (tag, attribute) pairs rewritten to absolute URLs
LINK_ATTRIBUTES = [
    ("a", "href"),
    ("img", "src"),
    ("source", "src"),
    ("video", "src"),
    ("video", "poster"),
    ("audio", "src"),
    ("track", "src"),
    ("iframe", "src"),
]

SRCSET_TAGS = ["img", "source"]

# Attributes used by lazy-loading scripts for the real image URL
LAZY_SRC_ATTRIBUTES = ["data-src", "data-lazy-src", "data-original", "data-url"]
LAZY_SRCSET_ATTRIBUTES = ["data-srcset", "data-lazy-srcset"]

KEPT_DATA_ATTRIBUTES = ["data-src", "data-srcset"]

UNSAFE_SCHEMES = ("javascript:", "vbscript:", "livescript:")

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")


def remove_comments(soup: Union[BeautifulSoup, Tag]) -> None:
    """Remove HTML comments from soup."""
    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()


def remove_selectors(soup: Union[BeautifulSoup, Tag], selectors: List[str]) -> None:
    """
    Remove elements matching CSS selectors from soup.

    Args:
        soup: BeautifulSoup or Tag object
        selectors: List of CSS selectors to remove
    """
    for selector in selectors:
        for elem in soup.select(selector):
            elem.decompose()


def remove_empty_elements(soup: Union[BeautifulSoup, Tag], tags: List[str]) -> None:
    """
    Remove empty elements (no text and no media).

    Args:
        soup: BeautifulSoup or Tag object
        tags: List of tag names to check (e.g., ['p', 'div'])
    """
    for tag_name in tags:
        for elem in soup.find_all(tag_name):
            if elem.decomposed:
                continue
            # Check if empty (no text and no images or embeds)
            if not elem.get_text(strip=True) and not elem.find(["img", "iframe", "video", "picture"]):
                elem.decompose()


def resolve_url(value: str, base_url: str) -> str:
    """
    Resolve a possibly relative URL against the page URL.

    Fragment-only, mailto:, tel: and data: URLs are returned unchanged.
    Protocol-relative URLs take the scheme of the base URL.
    """
    value = (value or "").strip()
    if not value or not base_url:
        return value

    if value.startswith("#") or value.lower().startswith(("mailto:", "tel:", "data:")):
        return value
    if value.lower().startswith(UNSAFE_SCHEMES):
        return value

    return urljoin(base_url, value)


def _resolve_srcset(value: str, base_url: str) -> str:
    candidates = []
    for candidate in value.split(","):
        candidate = candidate.strip()
        if not candidate:
            continue
        parts = candidate.split(None, 1)
        url = resolve_url(parts[0], base_url)
        candidates.append(f"{url} {parts[1]}" if len(parts) > 1 else url)
    return ", ".join(candidates)


def _is_placeholder(src: str) -> bool:
    return not src or src.startswith("data:") or "blank.gif" in src or "placeholder" in src


def absolutize_urls(soup: Union[BeautifulSoup, Tag], base_url: str) -> None:
    """
    Rewrite relative links and media URLs to absolute URLs.

    Honours a <base href> in the document. Lazy-loaded images have their
    real URL promoted from data-src (and similar) into src.

    Args:
        soup: BeautifulSoup or Tag object to modify in-place
        base_url: URL of the page the HTML came from
    """
    if not base_url:
        return

    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        base_url = urljoin(base_url, get_attr_str(base_tag, "href"))

    # Lazy images
    for img in soup.find_all(["img", "source"]):
        src = get_attr_str(img, "src")
        if _is_placeholder(src):
            for attr in LAZY_SRC_ATTRIBUTES:
                lazy = get_attr_str(img, attr)
                if lazy and not lazy.startswith("data:"):
                    img["src"] = lazy
                    break
        if not img.get("srcset"):
            for attr in LAZY_SRCSET_ATTRIBUTES:
                lazy_set = get_attr_str(img, attr)
                if lazy_set:
                    img["srcset"] = lazy_set
                    break

    for tag_name, attr in LINK_ATTRIBUTES:
        for elem in soup.find_all(tag_name):
            value = get_attr_str(elem, attr)
            if value:
                elem[attr] = resolve_url(value, base_url)

    for elem in soup.find_all(SRCSET_TAGS):
        srcset = get_attr_str(elem, "srcset")
        if srcset:
            elem["srcset"] = _resolve_srcset(srcset, base_url)


def _is_unsafe_url(attr: str, value: str) -> bool:
    compact = _CONTROL_CHARS_RE.sub("", value).lower()
    if compact.startswith(UNSAFE_SCHEMES):
        return True
    # Only images may be inlined
    if compact.startswith("data:"):
        return attr != "src" or not compact.startswith("data:image/")
    return False


def sanitize_html_attributes(soup: Union[BeautifulSoup, Tag]) -> None:
    """
    Neutralize attributes that carry behaviour or site styling.

    - Removes on* event handlers and URLs with unsafe schemes
    - Converts class → data-sanitized-class
    - Converts style → data-sanitized-style
    - Converts id → data-sanitized-id
    - Converts other data-* attributes → data-sanitized-* (except data-src, data-srcset)

    Args:
        soup: BeautifulSoup or Tag object to sanitize in-place
    """
    for elem in soup.find_all(True):
        for attr in list(elem.attrs):
            lower = attr.lower()
            if lower.startswith("on"):
                del elem[attr]
            elif lower in URL_ATTRIBUTES and _is_unsafe_url(lower, get_attr_str(elem, attr)):
                del elem[attr]

        # Convert class → data-sanitized-class
        if "class" in elem.attrs:
            elem["data-sanitized-class"] = get_attr_str(elem, "class")
            del elem["class"]

        # Convert style → data-sanitized-style
        if "style" in elem.attrs:
            elem["data-sanitized-style"] = get_attr_str(elem, "style")
            del elem["style"]

        # Convert id → data-sanitized-id
        if "id" in elem.attrs:
            elem["data-sanitized-id"] = get_attr_str(elem, "id")
            del elem["id"]

        attrs_to_rename = [
            attr
            for attr in elem.attrs
            if attr.startswith("data-")
            and attr not in KEPT_DATA_ATTRIBUTES
            and not attr.startswith("data-sanitized-")
        ]
        for attr in attrs_to_rename:
            new_attr = f"data-sanitized-{attr[5:]}"  # Remove "data-" prefix
            elem[new_attr] = elem[attr]
            del elem[attr]


def open_links_in_new_tab(soup: Union[BeautifulSoup, Tag]) -> None:
    """Make every link open in a new tab without access to the opener."""
    for link in soup.find_all("a", href=True):
        if get_attr_str(link, "href").startswith("#"):
            continue
        link["target"] = "_blank"
        link["rel"] = "noopener noreferrer"


def sanitize_html(html: str, base_url: Optional[str] = None) -> str:
    """
    Make HTML safe to display inside the reader.

    Removes scripts, styles, plugins, forms, comments and non-YouTube
    iframes, neutralizes attributes, and optionally resolves relative URLs
    against base_url first.

    Args:
        html: HTML fragment or document
        base_url: URL the HTML came from

    Returns:
        Sanitized HTML string
    """
    soup = BeautifulSoup(html or "", "html.parser")

    if base_url:
        absolutize_urls(soup, base_url)

    remove_comments(soup)

    for tag in soup.find_all(DANGEROUS_TAGS):
        tag.decompose()

    rewrite_youtube_embeds(soup)
    sanitize_html_attributes(soup)
    open_links_in_new_tab(soup)

    return str(soup).strip()
