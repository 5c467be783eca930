# apps/reports/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('analytics/summary/', views.analytics_summary_view, name='analytics_summary'),
]
