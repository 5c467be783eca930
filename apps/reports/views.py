# apps/reports/views.py
from django.http import JsonResponse
from apps.core.http import api_view
from .domain.services import ReportService


@api_view(["GET"])
def analytics_summary_view(request):
    return JsonResponse(ReportService().get_summary(request.user))
