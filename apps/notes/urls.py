# apps/notes/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('goals/<int:goal_id>/notes/', views.goal_notes_view, name='goal_notes'),
    path('notes/<int:note_id>/', views.note_detail_view, name='note_detail'),
]
