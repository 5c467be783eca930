# goal_tracker/urls.py
from django.contrib import admin
from django.urls import path, include
from apps.core import views as core_views


urlpatterns = [
    path('admin/', admin.site.urls),
    path('', core_views.health_view, name='home'),  # Pusta ścieżka = Health check
    # Tutaj podpinamy nasze aplikacje (wszystkie pod /api/):
    path('api/', include('apps.goals.urls')),
    path('api/', include('apps.tasks.urls')),
    path('api/', include('apps.notes.urls')),
    path('api/', include('apps.rewards.urls')),
    path('api/', include('apps.coaching.urls')),
    path('api/', include('apps.reports.urls')),
]
