"""Pytest fixtures for core app tests."""

from unittest.mock import MagicMock

from django.core.cache import cache

import pytest

from core.aggregators.sources import FeedSource
from core.services.cache_service import ArticleCache

LONG_PARAGRAPH = (
    "The release brings a faster type checker, better editor integration, and a long list of "
    "fixes contributed by the community over the last few months. Upgrading is recommended "
    "for every project, since the new version also ships with improved error messages."
)

RSS_FEED = f"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Example Feed</title>
    <link>https://example.com/</link>
    <description>Example articles</description>
    <item>
      <title>Full Content Article</title>
      <link>https://example.com/posts/full</link>
      <guid>https://example.com/posts/full</guid>
      <pubDate>Tue, 02 Jan 2024 10:00:00 GMT</pubDate>
      <description>A short teaser for the full article.</description>
      <content:encoded><![CDATA[<p>{LONG_PARAGRAPH}</p><p><img src="/images/chart.png" alt="Chart"></p><script>alert('x')</script>]]></content:encoded>
    </item>
    <item>
      <title>Summary Only Article</title>
      <link>https://example.com/posts/summary?utm_source=rss</link>
      <pubDate>Mon, 01 Jan 2024 08:30:00 GMT</pubDate>
      <description>&lt;p&gt;Only a &lt;b&gt;short&lt;/b&gt; summary here.&lt;/p&gt;</description>
    </item>
    <item>
      <title>Undated Article</title>
      <link>https://example.com/posts/undated</link>
      <description>This one has no publication date.</description>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = f"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Other Feed</title>
  <link href="https://other.example.org/"/>
  <id>urn:uuid:60a76c80-d399-11d9-b93C-0003939e0af6</id>
  <updated>2024-01-03T12:00:00Z</updated>
  <entry>
    <title>Atom Entry</title>
    <link rel="alternate" href="https://other.example.org/2024/atom-entry"/>
    <link rel="edit" href="https://other.example.org/edit/1"/>
    <id>urn:uuid:1225c695-cfb8-4ebb-aaaa-80da344efa6a</id>
    <updated>2024-01-03T12:00:00Z</updated>
    <summary>An Atom summary.</summary>
    <content type="html">&lt;p&gt;{LONG_PARAGRAPH}&lt;/p&gt;</content>
  </entry>
</feed>
"""

RDF_FEED = """<?xml version="1.0"?>
<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
         xmlns="http://purl.org/rss/1.0/"
         xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel rdf:about="https://rdf.example.net/">
    <title>RDF Feed</title>
    <link>https://rdf.example.net/</link>
    <description>RSS 1.0 feed</description>
  </channel>
  <item rdf:about="https://rdf.example.net/item-1">
    <title>RDF Item</title>
    <link>https://rdf.example.net/item-1</link>
    <description>RDF description.</description>
    <dc:date>2024-01-04T09:15:00Z</dc:date>
  </item>
</rdf:RDF>
"""

# Not well-formed: unescaped ampersands, markup in text, mismatched closing tag
MALFORMED_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Broken & Co</title>
    <item>
      <title>Tom & Jerry <i>return</i></title>
      <link>https://broken.example.com/tom-and-jerry</link>
      <pubDate>Wed, 03 Jan 2024 07:00:00 GMT</pubDate>
      <description><![CDATA[<p>Cats & mice</p>]]></description>
    </item>
    <item>
      <title>Escaped</title>
      <link>https://broken.example.com/escaped</link>
      <description>&lt;p&gt;Fish &amp;amp; chips&lt;/p&gt;</description>
    </item>
  </chanel>
</rss>
"""

ARTICLE_PAGE = f"""<!DOCTYPE html>
<html>
<head>
  <title>Page Title | Example</title>
  <meta property="og:title" content="A Great Article">
  <meta property="og:image" content="/images/lead.jpg">
  <base href="https://example.com/posts/">
</head>
<body>
  <nav class="menu"><a href="/">Home</a><a href="/about">About</a></nav>
  <div class="sidebar"><p>Subscribe to our newsletter, it is really great and full of news.</p></div>
  <div class="main-wrapper">
    <div class="story-text" id="story">
      <p>{LONG_PARAGRAPH}</p>
      <p>Read the <a href="details">details</a>, and see <img src="figure.png" alt="Figure"> too.</p>
      <p>Another paragraph, with commas, and enough text to count towards the score.</p>
      <iframe src="https://www.youtube.com/embed/dQw4w9WgXcQ"></iframe>
      <iframe src="https://ads.example.net/banner"></iframe>
    </div>
    <div class="comments"><p>First comment, I agree with all of this, totally.</p></div>
  </div>
  <footer><p>Copyright Example Inc, all rights reserved, forever and ever.</p></footer>
  <script>track();</script>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def article_cache():
    return ArticleCache()


@pytest.fixture
def example_source():
    return FeedSource(name="Example Feed", url="https://example.com/feed.xml")


@pytest.fixture
def other_source():
    return FeedSource(name="Other Feed", url="https://other.example.org/atom.xml")


@pytest.fixture
def rss_feed_text():
    return RSS_FEED


@pytest.fixture
def atom_feed_text():
    return ATOM_FEED


@pytest.fixture
def rdf_feed_text():
    return RDF_FEED


@pytest.fixture
def malformed_feed_text():
    return MALFORMED_FEED


@pytest.fixture
def article_page():
    return ARTICLE_PAGE


@pytest.fixture
def long_paragraph():
    return LONG_PARAGRAPH


def make_response(text="", content=None, status_code=200):
    """Fake requests.Response for patched requests.get calls."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.content = content if content is not None else text.encode("utf-8")
    response.raise_for_status.return_value = None
    return response
