# apps/reports/models.py
from django.db import models
from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType


class ActivityLog(models.Model):
    # Kto?
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='activity_logs')

    # Co zrobił?
    class ActionType(models.TextChoices):
        CREATED = 'created', 'Utworzono'
        UPDATED = 'updated', 'Zaktualizowano'
        COMPLETED = 'completed', 'Ukończono'
        REOPENED = 'reopened', 'Przywrócono'
        DELETED = 'deleted', 'Usunięto'

    action_type = models.CharField(max_length=20, choices=ActionType.choices)

    # Na czym? (Generic Relation; obiekt mógł już zostać usunięty)
    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    content_object = GenericForeignKey('content_type', 'object_id')

    description = models.TextField(blank=True)
    details = models.JSONField(default=dict, blank=True)

    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-timestamp']
        indexes = [
            models.Index(fields=['content_type', 'object_id'], name='activity_target_idx'),
            models.Index(fields=['user', 'action_type', 'timestamp'], name='activity_user_action_idx'),
        ]

    def __str__(self):
        return f"{self.user} - {self.action_type} - {self.timestamp}"
