"""
JSON API consumed by the reader front end.

GET /articles                    article list (?refresh=1 forces a refresh)
GET /article/<id>                full cached article
GET /article/<id>/content        extracted article body
GET /content?url=&feedUrl=       extracted body for any URL
GET /refresh_status              last and next refresh time
"""

import logging

from django.http import HttpResponse, JsonResponse
from django.views.decorators.http import require_http_methods

from core.aggregators.exceptions import (
    ArticleNotFoundError,
    ContentUnavailableError,
    RefreshStatusUnavailableError,
    ValidationError,
)
from core.services import AggregatorService, ArticleService

logger = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes")


def _json_response(data, status=200, **headers):
    response = JsonResponse(data, status=status, json_dumps_params={"ensure_ascii": False})
    response["Access-Control-Allow-Origin"] = "*"
    for name, value in headers.items():
        response[name.replace("_", "-")] = value
    return response


def _is_forced(request) -> bool:
    return request.GET.get("refresh", "").lower() in TRUE_VALUES


@require_http_methods(["GET"])
def articles_view(request):
    """
    Cached article list without content, newest first.

    The list is refreshed first when it is older than the refresh interval.
    """
    payload = AggregatorService.get_articles(force=_is_forced(request))
    return _json_response(payload)


@require_http_methods(["GET"])
def article_view(request, article_id):
    """Full cached article, or 404."""
    try:
        article = ArticleService.get_article(article_id)
    except ArticleNotFoundError:
        return HttpResponse("Article not found", status=404, content_type="text/plain")
    return _json_response(article)


@require_http_methods(["GET"])
def article_content_view(request, article_id):
    """
    Readable content of a cached article.

    Returns:
        200: {"content", "strategy", "url", "title", "imageUrl"}
        404: Unknown article
        502: No extraction strategy produced content
    """
    try:
        result = ArticleService.get_article_content(article_id, force=_is_forced(request))
    except ArticleNotFoundError:
        return _json_response({"content": "", "error": "Article not found"}, status=404)
    except ContentUnavailableError as e:
        logger.warning(f"Content unavailable for article {article_id}: {e}")
        return _json_response({"content": "", "error": "Failed to extract content"}, status=502)
    return _json_response(result)


@require_http_methods(["GET"])
def content_view(request):
    """
    Readable content for an arbitrary article URL.

    Query Parameters:
        url (required): Article URL
        feedUrl (optional): Feed listing the article
        snippet (optional): Preview text used as last resort
        refresh (optional): Ignore a cached result

    Returns:
        200: {"content", "strategy", "url", "title", "imageUrl"}
        400: Missing or invalid url
        502: No extraction strategy produced content
    """
    try:
        result = ArticleService.get_content(
            request.GET.get("url", ""),
            feed_url=request.GET.get("feedUrl") or None,
            snippet=request.GET.get("snippet", ""),
            force=_is_forced(request),
        )
    except ValidationError as e:
        return _json_response({"content": "", "error": str(e)}, status=400)
    except ContentUnavailableError as e:
        logger.warning(f"Content unavailable: {e}")
        return _json_response({"content": "", "error": "Failed to extract content"}, status=502)
    return _json_response(result)


@require_http_methods(["GET"])
def refresh_status_view(request):
    """
    Time of the last refresh and of the next scheduled one.

    Returns:
        200: {"lastUpdate", "nextRefresh"}
        404: Never refreshed
        500: Stored timestamp is corrupt
    """
    try:
        status = AggregatorService.refresh_status()
    except RefreshStatusUnavailableError:
        return _json_response({"error": "No update information available"}, status=404)
    except (TypeError, ValueError) as e:
        logger.error(f"Error retrieving refresh status: {e}")
        return _json_response({"error": "Failed to retrieve refresh status"}, status=500)

    return _json_response(status, Cache_Control="no-cache, no-store, must-revalidate")
