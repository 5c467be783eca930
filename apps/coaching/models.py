# apps/coaching/models.py
from django.db import models
from django.conf import settings


class DailyQuote(models.Model):
    """Cytat motywacyjny dnia dla celu (generowany przy pierwszym odczycie)."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='daily_quotes')
    goal = models.ForeignKey('goals.Goal', on_delete=models.CASCADE, related_name='daily_quotes')

    quote = models.TextField()
    is_read = models.BooleanField(default=False)
    day = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-day']
        constraints = [
            models.UniqueConstraint(fields=['user', 'goal', 'day'], name='one_quote_per_goal_per_day'),
        ]

    def __str__(self):
        return f"{self.goal} ({self.day})"


class FutureMessage(models.Model):
    """Wiadomość "od przyszłego siebie" - jedna na użytkownika na dzień."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='future_messages')

    message = models.TextField()
    is_read = models.BooleanField(default=False)
    day = models.DateField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-day']
        constraints = [
            models.UniqueConstraint(fields=['user', 'day'], name='one_future_message_per_day'),
        ]

    def __str__(self):
        return f"{self.user} ({self.day})"
