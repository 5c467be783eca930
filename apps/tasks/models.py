# apps/tasks/models.py
from django.db import models
from django.conf import settings
from django.db.models import Q


class Task(models.Model):
    goal = models.ForeignKey('goals.Goal', on_delete=models.CASCADE, related_name='tasks')

    # Właściciel zdenormalizowany (autoryzacja jednym lookupem, bez JOIN przez Goal)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='tasks')

    title = models.CharField(max_length=200)
    completed = models.BooleanField(default=False)

    # Czas
    estimated_minutes = models.PositiveIntegerField(null=True, blank=True)
    total_minutes_spent = models.PositiveIntegerField(default=0)
    planned_date = models.DateField(null=True, blank=True)

    notes = models.TextField(null=True, blank=True)

    # Hierarchia: cel -> zadanie -> podzadanie (maks. 2 poziomy)
    # Kasowanie podzadań robi TaskService.delete_task (razem z przeliczeniem postępu),
    # dlatego tu DO_NOTHING zamiast CASCADE.
    is_subtask = models.BooleanField(default=False)
    parent_task = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='subtasks'
    )

    is_ai_generated = models.BooleanField(default=False)
    order = models.PositiveIntegerField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['order', 'id']
        indexes = [
            models.Index(fields=['goal', 'completed'], name='task_goal_completed_idx'),
            models.Index(fields=['user', 'planned_date'], name='task_user_planned_idx'),
        ]

    def __str__(self):
        return self.title


class TimeEntry(models.Model):
    """Sesja mierzenia czasu nad zadaniem. Jedna aktywna na użytkownika."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='time_entries')
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='time_entries')

    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    coins_earned = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-start_time']
        constraints = [
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(is_active=True),
                name='one_active_timer_per_user',
            ),
        ]

    @property
    def minutes(self) -> int:
        if not self.end_time:
            return 0
        return int((self.end_time - self.start_time).total_seconds() // 60)

    def __str__(self):
        return f"{self.task} ({self.start_time:%Y-%m-%d %H:%M})"
