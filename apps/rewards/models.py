# apps/rewards/models.py
from django.db import models
from django.conf import settings


class RewardBalance(models.Model):
    """Stan monet użytkownika (zarabiane czasem pracy nad zadaniami)."""
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reward_balance')
    coins = models.PositiveIntegerField(default=0)
    last_updated = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user}: {self.coins}"


class RewardItem(models.Model):
    class RewardType(models.TextChoices):
        THEME = 'theme', 'Motyw'
        BADGE = 'badge', 'Odznaka'
        BREAK = 'break', 'Przerwa'
        TREAT = 'treat', 'Nagroda'

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    cost = models.PositiveIntegerField()
    icon = models.CharField(max_length=50)
    type = models.CharField(max_length=20, choices=RewardType.choices, default=RewardType.TREAT)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['cost', 'id']

    def __str__(self):
        return f"{self.name} ({self.cost})"


class PurchasedReward(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='purchased_rewards')
    reward_item = models.ForeignKey(RewardItem, on_delete=models.CASCADE, related_name='purchases')
    purchased_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-purchased_at']

    def __str__(self):
        return f"{self.user} -> {self.reward_item}"
