# apps/goals/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('goals/', views.goal_list_view, name='goal_list'),
    path('goals/<int:goal_id>/', views.goal_detail_view, name='goal_detail'),
]
