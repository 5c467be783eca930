# apps/reports/domain/services.py
from datetime import timedelta
from django.db.models import Avg, Count, Q, Sum
from django.utils import timezone
from apps.goals.models import Goal
from apps.reports.models import ActivityLog
from apps.rewards.services import RewardService
from apps.tasks.models import Task


class ReportService:

    def get_summary(self, user):
        """Podsumowanie do panelu analityki."""
        week_ago = timezone.now() - timedelta(days=7)

        # 1. Cele
        goals = Goal.objects.filter(user=user).aggregate(
            total=Count('id'),
            completed=Count('id', filter=Q(progress=100)),
            avg_progress=Avg('progress'),
        )

        # 2. Zadania (stan obecny)
        tasks = Task.objects.filter(user=user).aggregate(
            total=Count('id'),
            completed=Count('id', filter=Q(completed=True)),
            minutes=Sum('total_minutes_spent'),
        )

        # 3. Aktywność z ostatnich 7 dni (z dziennika zdarzeń)
        completed_this_week = ActivityLog.objects.filter(
            user=user,
            action_type=ActivityLog.ActionType.COMPLETED,
            timestamp__gte=week_ago
        ).count()

        return {
            'goals': {
                'total': goals['total'],
                'completed': goals['completed'],
                'averageProgress': round(goals['avg_progress'] or 0),
            },
            'tasks': {
                'total': tasks['total'],
                'completed': tasks['completed'],
                'completedLast7Days': completed_this_week,
            },
            'minutesTracked': tasks['minutes'] or 0,
            'coins': RewardService().get_balance(user.id),
        }
