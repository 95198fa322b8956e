import pytest

from bs4 import BeautifulSoup

from core.aggregators.utils.content_extractor import (
    class_weight,
    extract_main_content,
    extract_page_title,
    find_lead_image,
    find_main_container,
    link_density,
)
from core.aggregators.utils.content_formatter import format_article_content


class TestFindMainContainer:
    def test_scores_paragraph_container(self, article_page):
        soup = BeautifulSoup(article_page, "html.parser")
        container = find_main_container(soup)

        assert container is not None
        assert container.get("id") == "story"
        text = container.get_text()
        assert "faster type checker" in text
        assert "Subscribe" not in text
        assert "First comment" not in text

    def test_removes_boilerplate(self, article_page):
        soup = BeautifulSoup(article_page, "html.parser")
        find_main_container(soup)

        assert soup.find("nav") is None
        assert soup.find("footer") is None
        assert soup.find("script") is None
        assert soup.find(class_="sidebar") is None
        # Video embeds survive, other iframes do not
        iframes = soup.find_all("iframe")
        assert [iframe["src"] for iframe in iframes] == [
            "https://www.youtube.com/embed/dQw4w9WgXcQ"
        ]

    def test_article_selector_wins(self, long_paragraph):
        html = f"""
        <body>
          <div class="intro"><p>{long_paragraph}</p></div>
          <article><h1>Title</h1><p>{long_paragraph}</p></article>
        </body>
        """
        soup = BeautifulSoup(html, "html.parser")
        assert find_main_container(soup).name == "article"

    def test_article_selector_needs_text(self, long_paragraph):
        html = f"""
        <body>
          <article><p>Too short.</p></article>
          <div class="text"><p>{long_paragraph}</p><p>{long_paragraph}</p></div>
        </body>
        """
        soup = BeautifulSoup(html, "html.parser")
        container = find_main_container(soup)
        assert container.name == "div"

    def test_link_heavy_candidate_loses(self, long_paragraph):
        links = "".join(f'<p><a href="/{i}">{long_paragraph[:60]}</a></p>' for i in range(5))
        html = f"""
        <body>
          <div id="a">{links}</div>
          <div id="b"><p>{long_paragraph}</p></div>
        </body>
        """
        soup = BeautifulSoup(html, "html.parser")
        assert find_main_container(soup).get("id") == "b"

    def test_no_paragraphs(self):
        soup = BeautifulSoup("<body><div>tiny</div></body>", "html.parser")
        assert find_main_container(soup) is None

    def test_keeps_layout_wrapper_holding_article(self, long_paragraph):
        html = f"""
        <body>
          <div class="layout-with-sidebar">
            <article><h1>Title</h1><p>{long_paragraph}</p><p>{long_paragraph}</p></article>
            <div class="sidebar"><p>Subscribe to our newsletter for weekly updates.</p></div>
          </div>
        </body>
        """
        soup = BeautifulSoup(html, "html.parser")
        container = find_main_container(soup)

        assert container is not None
        assert container.name == "article"
        assert "faster type checker" in container.get_text()
        assert soup.find(class_="sidebar") is None

    def test_retries_without_class_filtering(self, long_paragraph):
        html = f"""
        <body>
          <div class="social-layout"><div><p>{long_paragraph}</p><p>{long_paragraph}</p></div></div>
        </body>
        """
        soup = BeautifulSoup(html, "html.parser")
        container = find_main_container(soup)

        assert container is not None
        assert "faster type checker" in container.get_text()


class TestHeuristics:
    def test_link_density(self):
        soup = BeautifulSoup('<div>abcd<a href="#">efgh</a></div>', "html.parser")
        # "abcd efgh": 4 of 9 characters are link text
        assert link_density(soup.div) == pytest.approx(4 / 9)

    def test_link_density_empty(self):
        soup = BeautifulSoup("<div></div>", "html.parser")
        assert link_density(soup.div) == 0.0

    def test_class_weight(self):
        soup = BeautifulSoup(
            '<div class="post-content"></div><div class="sidebar"></div><div></div>', "html.parser"
        )
        positive, negative, neutral = soup.find_all("div")
        assert class_weight(positive) == 25
        assert class_weight(negative) == -25
        assert class_weight(neutral) == 0


class TestExtractMainContent:
    def test_selector(self):
        html = '<body><div class="x"><p>Keep</p><div class="ad">Ad</div></div><p>Other</p></body>'
        result = extract_main_content(html, selector=".x", remove_selectors=[".ad"])

        assert "Keep" in result
        assert "Ad" not in result
        assert "Other" not in result

    def test_body_fallback(self):
        result = extract_main_content("<html><body><div>tiny</div></body></html>")
        assert result == "<div>tiny</div>"

    def test_heuristics(self, article_page):
        result = extract_main_content(article_page)
        assert 'id="story"' in result


class TestPageMetadata:
    def test_find_lead_image(self, article_page):
        soup = BeautifulSoup(article_page, "html.parser")
        assert find_lead_image(soup, "https://example.com/posts/1") == "https://example.com/images/lead.jpg"

    def test_find_lead_image_twitter_and_missing(self):
        soup = BeautifulSoup('<meta name="twitter:image" content="https://cdn.example.com/t.png">', "html.parser")
        assert find_lead_image(soup) == "https://cdn.example.com/t.png"
        assert find_lead_image(BeautifulSoup("<p>x</p>", "html.parser")) is None

    def test_extract_page_title(self, article_page):
        assert extract_page_title(BeautifulSoup(article_page, "html.parser")) == "A Great Article"
        assert extract_page_title(BeautifulSoup("<title> Plain </title>", "html.parser")) == "Plain"
        assert extract_page_title(BeautifulSoup("<p>x</p>", "html.parser")) == ""


class TestFormatArticleContent:
    def test_sections(self):
        result = format_article_content(
            "<p>Body</p>", 'A "quoted" title', "https://example.com/a?b=1&c=2", "https://example.com/i.jpg"
        )

        assert result.startswith('<header data-sanitized-class="article-header">')
        assert 'alt="A &quot;quoted&quot; title"' in result
        assert '<section data-sanitized-class="article-content"><p>Body</p></section>' in result
        assert 'href="https://example.com/a?b=1&amp;c=2"' in result

    def test_without_image(self):
        result = format_article_content("<p>Body</p>", "Title", "https://example.com/a")
        assert "<header" not in result
        assert "<footer>" in result
