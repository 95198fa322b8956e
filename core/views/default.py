"""Default views for health checks."""

import logging

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core.services.cache_service import ArticleCache

logger = logging.getLogger(__name__)


@require_http_methods(["GET"])
def health_check(request):
    """
    Health check endpoint for Docker and monitoring services.

    Returns a JSON response indicating the health status of the application,
    including cache connectivity status.

    Returns:
        200: Application is healthy
        503: Application is unhealthy (cache unreachable or other issues)
    """
    try:
        if not ArticleCache().ping():
            return JsonResponse(
                {"status": "unhealthy", "error": "Cache round trip failed"}, status=503
            )
        return JsonResponse({"status": "healthy", "cache": "connected"})
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return JsonResponse({"status": "unhealthy", "error": str(e)}, status=503)
