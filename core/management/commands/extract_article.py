"""
Django management command for running content extraction on one URL.

Usage:
    python manage.py extract_article "https://example.com/post"
    python manage.py extract_article "https://example.com/post" --feed-url "https://example.com/feed.xml"
    python manage.py extract_article "https://example.com/post" --output post.html
"""

from django.core.management.base import BaseCommand, CommandError

from core.aggregators.exceptions import ContentUnavailableError
from core.aggregators.services.content_extraction import ContentExtractor, ExtractionContext


class Command(BaseCommand):
    """Management command for testing content extraction."""

    help = "Extract the readable content of an article URL"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument("url", type=str, help="Article URL")

        parser.add_argument(
            "--feed-url",
            type=str,
            default=None,
            help="Feed the article is listed in (enables feed content lookup)",
        )

        parser.add_argument(
            "--snippet",
            type=str,
            default="",
            help="Preview text to fall back on",
        )

        parser.add_argument(
            "--output",
            type=str,
            default=None,
            help="Write the extracted HTML to this file",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        url = options["url"]

        self.stdout.write(self.style.HTTP_INFO(f"Extracting content for: {url}"))

        context = ExtractionContext(
            url=url, feed_url=options["feed_url"], snippet=options["snippet"]
        )

        try:
            result = ContentExtractor().extract(context)
        except ContentUnavailableError as e:
            raise CommandError(str(e)) from e

        self.stdout.write(self.style.SUCCESS(f"✓ Strategy: {result.strategy}"))
        if result.title:
            self.stdout.write(f"Title: {result.title}")
        if result.image_url:
            self.stdout.write(f"Image: {result.image_url}")
        self.stdout.write(f"Content: {len(result.html)} characters")

        output = options["output"]
        if output:
            with open(output, "w", encoding="utf-8") as f:
                f.write(result.html)
            self.stdout.write(self.style.SUCCESS(f"Written to {output}"))
        else:
            self.stdout.write("-" * 80)
            self.stdout.write(result.html[:500] + ("...[truncated]" if len(result.html) > 500 else ""))
            self.stdout.write("-" * 80)
