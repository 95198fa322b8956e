"""Django command to refresh the cached article list once."""

from django.core.management.base import BaseCommand, CommandError

from core.aggregators import get_feed_sources
from core.services import AggregatorService


class Command(BaseCommand):
    help = "Fetch all configured feeds and replace the cached article list"

    def add_arguments(self, parser):
        parser.add_argument(
            "--if-stale",
            action="store_true",
            help="Only refresh when the cached list is older than the refresh interval",
        )

    def handle(self, *args, **options):
        try:
            sources = get_feed_sources()
        except ValueError as e:
            raise CommandError(f"Invalid NEWSGLANCE_FEED_SOURCES: {e}") from e

        if not sources:
            raise CommandError("No feed sources configured (NEWSGLANCE_FEED_SOURCES)")

        if options.get("if_stale"):
            from core.services import ArticleCache

            if not ArticleCache().is_stale():
                self.stdout.write(self.style.SUCCESS("Article list is up to date"))
                return

        self.stdout.write(self.style.SUCCESS(f"Refreshing {len(sources)} feed sources"))

        try:
            result = AggregatorService.refresh_articles(sources=sources)
        except Exception as e:
            raise CommandError(f"Error: {str(e)}") from e

        for source in sources:
            self._print_source(source, source.name not in result["failed_sources"])

        summary = f"{result['articles_count']} articles cached"
        if result["success"]:
            self.stdout.write(self.style.SUCCESS(summary))
        else:
            self.stdout.write(self.style.WARNING(f"{summary} ({result['error']})"))

    def _print_source(self, source, success):
        """Print the result for one source."""
        if success:
            self.stdout.write(self.style.SUCCESS(f"✓ {source.name} ({source.url})"))
        else:
            self.stdout.write(self.style.ERROR(f"✗ {source.name} ({source.url}) - failed"))
