# apps/coaching/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('goals/<int:goal_id>/coaching/', views.coaching_view, name='goal_coaching'),
    path('goals/<int:goal_id>/quote/', views.daily_quote_view, name='goal_quote'),
    path('goals/<int:goal_id>/quote/read/', views.daily_quote_read_view, name='goal_quote_read'),
    path('goals/<int:goal_id>/vision/', views.vision_view, name='goal_vision'),
    path('future-message/today/', views.future_message_view, name='future_message_today'),
    path('future-message/read/', views.future_message_read_view, name='future_message_read'),
]
