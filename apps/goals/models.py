# apps/goals/models.py
from django.db import models
from django.conf import settings


class Goal(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='goals')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    target_date = models.DateField()
    progress = models.PositiveIntegerField(default=0, help_text="Postęp w procentach (0-100)")

    # Ile głównych zadań AI poproszono przy tworzeniu celu
    total_tasks = models.PositiveIntegerField(default=0)

    # Wizja (generowana z odpowiedzi na 4 pytania)
    vision_statement = models.TextField(blank=True, null=True)
    vision_responses = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['target_date', 'id']

    def __str__(self):
        return self.title
