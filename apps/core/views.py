# apps/core/views.py
import logging

from django.db import connection, DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

logger = logging.getLogger(__name__)


@require_http_methods(["GET"])
def health_view(request):
    """Prosty health check (bez logowania): czy baza odpowiada."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return JsonResponse({'status': 'healthy', 'database': 'connected'})
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        return JsonResponse({'status': 'unhealthy', 'database': 'disconnected'}, status=503)
