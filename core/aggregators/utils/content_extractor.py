"""Content extraction utilities using BeautifulSoup."""

import copy
import logging
import re
from typing import Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .bs4_utils import get_attr_str, get_class_and_id, get_visible_text
from .html_cleaner import remove_selectors as remove_elements
from .youtube import is_youtube_url

logger = logging.getLogger(__name__)

# Elements that never hold article text
UNLIKELY_TAGS = [
    "script",
    "style",
    "noscript",
    "nav",
    "header",
    "footer",
    "aside",
    "form",
    "button",
    "svg",
    "dialog",
    "template",
]

# Well-known article containers, most specific first
ARTICLE_SELECTORS = [
    "[itemprop='articleBody']",
    ".article-body",
    ".article-content",
    ".article__body",
    ".entry-content",
    ".post-content",
    ".post-body",
    ".story-body",
    ".content-body",
    "article",
    "[role='main']",
    "main",
]

NEGATIVE_PATTERN = re.compile(
    r"comment|sidebar|(^|[\s_-])ads?([\s_-]|$)|advert|sponsor|share|social|promo|related|"
    r"menu|cookie|newsletter|subscribe|footer|masthead|breadcrumb|popup|modal|banner|"
    r"widget|outbrain|taboola|pagination|author-bio|skip-link",
    re.I,
)

POSITIVE_PATTERN = re.compile(
    r"article|body|content|entry|main|post|story|text|blog|prose", re.I
)

CANDIDATE_TAGS = ["div", "section", "article", "main", "td", "blockquote"]

SCORABLE_TAGS = CANDIDATE_TAGS + ["body"]

# Minimum text for a container found by selector to be trusted
MIN_SELECTOR_TEXT = 140

# Paragraphs shorter than this do not count towards a container's score
MIN_PARAGRAPH_LENGTH = 25


def extract_main_content(
    html: str, selector: Optional[str] = None, remove_selectors: Optional[List[str]] = None
) -> str:
    """
    Extract main content from HTML.

    Tries the given CSS selector first, then the article heuristics of
    find_main_container, and finally the whole body.

    Args:
        html: Full HTML document
        selector: CSS selector for main content
        remove_selectors: CSS selectors for elements to remove

    Returns:
        Extracted HTML content
    """
    soup = BeautifulSoup(html, "html.parser")

    content = None
    if selector:
        found = soup.select_one(selector)
        if isinstance(found, Tag):
            content = found
        else:
            logger.debug(f"Selector '{selector}' matched nothing, using heuristics")

    if content is None:
        content = find_main_container(soup)

    if content is None:
        # Fallback: return entire body
        body = soup.find("body")
        content = body if isinstance(body, Tag) else soup

    if remove_selectors and isinstance(content, Tag):
        remove_elements(content, remove_selectors)

    if isinstance(content, Tag) and content.name == "body":
        return content.decode_contents()
    return str(content)


def remove_unlikely_candidates(
    soup: Union[BeautifulSoup, Tag], strip_by_name: bool = True
) -> None:
    """
    Remove navigation, ads and other boilerplate from a parsed page.

    Elements are dropped by tag name (nav, header, footer, ...) and, with
    strip_by_name, by class/id names that signal boilerplate unless the name
    also looks like article content or the element wraps the article.
    Video iframes survive.
    """
    for elem in soup.find_all(UNLIKELY_TAGS):
        # <header> inside an article often holds the headline and lead image
        if elem.name == "header" and elem.find_parent("article"):
            continue
        elem.decompose()

    for iframe in soup.find_all("iframe"):
        if not is_youtube_url(get_attr_str(iframe, "src")):
            iframe.decompose()

    if not strip_by_name:
        return

    for elem in soup.find_all(True):
        if elem.decomposed or elem.name in ("html", "body", "article", "main"):
            continue
        names = get_class_and_id(elem)
        if not names:
            continue
        if NEGATIVE_PATTERN.search(names) and not POSITIVE_PATTERN.search(names):
            # Layout wrappers like "layout-with-sidebar" can hold the article
            if _wraps_article(elem):
                continue
            elem.decompose()


def _wraps_article(elem: Tag) -> bool:
    for candidate in elem.select(", ".join(ARTICLE_SELECTORS)):
        if len(get_visible_text(candidate)) >= MIN_SELECTOR_TEXT:
            return True
    return False


def link_density(elem: Tag) -> float:
    """Share of an element's text that sits inside links."""
    text_length = len(get_visible_text(elem))
    if text_length == 0:
        return 0.0
    link_length = sum(len(get_visible_text(link)) for link in elem.find_all("a"))
    return min(link_length / text_length, 1.0)


def class_weight(elem: Tag) -> int:
    """+25 for content-like class/id names, -25 for boilerplate-like ones."""
    names = get_class_and_id(elem)
    if not names:
        return 0
    weight = 0
    if POSITIVE_PATTERN.search(names):
        weight += 25
    if NEGATIVE_PATTERN.search(names):
        weight -= 25
    return weight


def score_candidates(soup: Union[BeautifulSoup, Tag]) -> List[Tuple[Tag, float]]:
    """
    Score container elements by the paragraphs they hold.

    Every paragraph adds 1 point, 1 per comma and 1 per 100 characters (at
    most 3) to its parent, and half of that to its grandparent. Candidates
    are then weighted by class names and scaled by their link density.

    Returns:
        (element, score) pairs in document order
    """
    # Keyed by id(): Tag hashes by its markup, which is slow and not unique
    candidates: Dict[int, Tag] = {}
    scores: Dict[int, float] = {}

    def add_score(elem: Tag, points: float) -> None:
        key = id(elem)
        if key not in candidates:
            candidates[key] = elem
            scores[key] = float(class_weight(elem))
        scores[key] += points

    for paragraph in soup.find_all(["p", "pre", "td"]):
        text = get_visible_text(paragraph)
        if len(text) < MIN_PARAGRAPH_LENGTH:
            continue

        paragraph_score = 1 + text.count(",") + min(len(text) / 100, 3)

        parent = paragraph.parent
        if not isinstance(parent, Tag) or parent.name not in SCORABLE_TAGS:
            continue
        add_score(parent, paragraph_score)

        grandparent = parent.parent
        if isinstance(grandparent, Tag) and grandparent.name in SCORABLE_TAGS:
            add_score(grandparent, paragraph_score / 2)

    return [
        (elem, scores[key] * (1 - link_density(elem))) for key, elem in candidates.items()
    ]


def find_main_container(soup: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
    """
    Find the element holding the article body.

    1. Strip boilerplate elements
    2. Accept a well-known article container with enough text
    3. Otherwise pick the best scoring paragraph container

    When nothing is found, the search runs again on an untouched copy of
    the page without dropping elements by class/id name.

    Args:
        soup: Parsed page (modified in-place)

    Returns:
        The article element, or None if the page has no usable text
    """
    pristine = copy.copy(soup)

    container = _search_container(soup, strip_by_name=True)
    if container is None:
        logger.debug("No container found, retrying without class/id filtering")
        container = _search_container(pristine, strip_by_name=False)
    return container


def _search_container(soup: Union[BeautifulSoup, Tag], strip_by_name: bool) -> Optional[Tag]:
    remove_unlikely_candidates(soup, strip_by_name=strip_by_name)

    for selector in ARTICLE_SELECTORS:
        for candidate in soup.select(selector):
            text_length = len(get_visible_text(candidate))
            if text_length >= MIN_SELECTOR_TEXT and link_density(candidate) < 0.5:
                logger.debug(f"Main content found by selector '{selector}'")
                return candidate

    scored = score_candidates(soup)
    if not scored:
        logger.debug("No paragraph containers found")
        return None

    best, best_score = max(scored, key=lambda pair: pair[1])
    logger.debug(
        f"Main content found by scoring: <{best.name}> '{get_class_and_id(best)}' "
        f"score={best_score:.1f}"
    )
    return best


def find_lead_image(soup: Union[BeautifulSoup, Tag], base_url: str = "") -> Optional[str]:
    """
    Find the representative image of a page (og:image, etc.).

    Args:
        soup: Parsed page
        base_url: Page URL to resolve relative image URLs

    Returns:
        Absolute image URL or None
    """
    candidates = [
        # 1. Open Graph image
        (soup.find("meta", attrs={"property": "og:image"}), "content"),
        # 2. Twitter image
        (soup.find("meta", attrs={"name": "twitter:image"}), "content"),
        # 3. <link rel="image_src">
        (soup.find("link", attrs={"rel": "image_src"}), "href"),
    ]

    for tag, attr in candidates:
        if isinstance(tag, Tag):
            img_url = get_attr_str(tag, attr).strip()
            if img_url:
                return urljoin(base_url, img_url) if base_url else img_url

    return None


def extract_page_title(soup: Union[BeautifulSoup, Tag]) -> str:
    """Title of a page from og:title or <title>."""
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if isinstance(og_title, Tag):
        title = get_attr_str(og_title, "content").strip()
        if title:
            return title

    title_tag = soup.find("title")
    if isinstance(title_tag, Tag):
        return get_visible_text(title_tag)

    return ""
