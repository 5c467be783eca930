# apps/notes/models.py
from django.db import models
from django.conf import settings


class Note(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='notes')
    goal = models.ForeignKey('goals.Goal', on_delete=models.CASCADE, related_name='notes')

    # Opcjonalnie przypięta do zadania tego samego celu
    task = models.ForeignKey(
        'tasks.Task',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='attached_notes'
    )

    title = models.CharField(max_length=200)
    content = models.TextField(blank=True, help_text="Markdown supported")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at', '-id']

    def __str__(self):
        return self.title
