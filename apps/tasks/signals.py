# apps/tasks/signals.py
from django.db.models.signals import post_save
from django.dispatch import receiver
from apps.reports.services import ActivityLogger
from apps.reports.models import ActivityLog
from .models import Task


@receiver(post_save, sender=Task)
def log_task_created(sender, instance, created, **kwargs):
    """
    Loguje utworzenie zadania. Zmiany stanu idą przez QuerySet.update()
    (bez post_save), więc ukończenie/usunięcie loguje warstwa widoków.
    """
    if not created:
        return

    ActivityLogger.log(
        instance.user, instance,
        ActivityLog.ActionType.CREATED,
        f"Utworzono zadanie: {instance.title}",
        details={'goal_id': instance.goal_id, 'is_subtask': instance.is_subtask}
    )
