# apps/tasks/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('goals/<int:goal_id>/tasks/', views.task_create_view, name='task_create'),
    path('goals/<int:goal_id>/tasks/reorder/', views.task_reorder_view, name='task_reorder'),
    path('tasks/overdue/', views.overdue_tasks_view, name='task_overdue'),
    path('tasks/overdue/move-to-today/', views.overdue_move_to_today_view, name='task_overdue_move'),
    path('tasks/search/', views.task_search_view, name='task_search'),
    path('tasks/<int:task_id>/', views.task_detail_view, name='task_detail'),
    path('tasks/<int:task_id>/timer/start/', views.timer_start_view, name='timer_start'),
    path('tasks/<int:task_id>/timer/stop/', views.timer_stop_view, name='timer_stop'),
    path('timer/current/', views.timer_current_view, name='timer_current'),
]
