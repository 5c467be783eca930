from django.contrib import admin
from .models import ActivityLog


@admin.register(ActivityLog)
class ActivityLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'user', 'action_type', 'content_type', 'object_id')
    list_filter = ('action_type', 'content_type')
    search_fields = ('description',)
