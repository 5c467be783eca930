from django.contrib import admin
from .models import Task, TimeEntry


class SubtaskInline(admin.TabularInline):
    model = Task
    fk_name = 'parent_task'
    extra = 0
    fields = ('title', 'completed', 'estimated_minutes', 'order')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'goal', 'is_subtask', 'completed', 'planned_date', 'order')
    list_filter = ('completed', 'is_subtask', 'is_ai_generated')
    search_fields = ('title',)
    inlines = [SubtaskInline]


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ('task', 'user', 'start_time', 'end_time', 'coins_earned', 'is_active')
    list_filter = ('is_active',)
