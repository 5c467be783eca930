# apps/tasks/services/time_tracking.py
import logging
from typing import Optional
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone
from apps.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from apps.rewards.services import RewardService
from apps.tasks.models import Task, TimeEntry

logger = logging.getLogger(__name__)


class TimeTrackingService:
    """
    Stoper zadań. Użytkownik ma co najwyżej jeden aktywny wpis
    (pilnuje tego constraint 'one_active_timer_per_user' w bazie).
    """

    def __init__(self, reward_service: Optional[RewardService] = None):
        self.reward_service = reward_service or RewardService()

    def current(self, user_id: int) -> Optional[TimeEntry]:
        return TimeEntry.objects.filter(user_id=user_id, is_active=True).select_related('task').first()

    def start(self, task_id: int, user_id: int) -> TimeEntry:
        task = self._get_owned_task(task_id, user_id)

        active = self.current(user_id)
        if active:
            raise ConflictError(
                "Another timer is already running",
                details={'taskId': active.task_id}
            )

        try:
            with transaction.atomic():
                entry = TimeEntry.objects.create(user_id=user_id, task=task, start_time=timezone.now())
        except IntegrityError:
            # Wyścig: inne żądanie uruchomiło stoper między sprawdzeniem a zapisem
            raise ConflictError("Another timer is already running")

        logger.info("Timer started: user %s, task %s", user_id, task.id)
        return entry

    def stop(self, task_id: int, user_id: int) -> TimeEntry:
        self._get_owned_task(task_id, user_id)

        with transaction.atomic():
            entry = TimeEntry.objects.select_for_update().filter(
                user_id=user_id, task_id=task_id, is_active=True
            ).first()
            if not entry:
                raise NotFoundError("No active timer for this task")

            # 1. Zamknij wpis
            entry.end_time = timezone.now()
            entry.is_active = False
            minutes = entry.minutes
            entry.coins_earned = minutes * settings.COINS_PER_MINUTE
            entry.save(update_fields=['end_time', 'is_active', 'coins_earned'])

            # 2. Dolicz czas do zadania
            if minutes:
                Task.objects.filter(id=task_id).update(total_minutes_spent=F('total_minutes_spent') + minutes)

            # 3. Monety za pracę
            self.reward_service.award(user_id, entry.coins_earned)

        logger.info("Timer stopped: user %s, task %s, %s min", user_id, task_id, minutes)
        return entry

    def _get_owned_task(self, task_id: int, user_id: int) -> Task:
        try:
            task = Task.objects.get(id=task_id)
        except Task.DoesNotExist:
            raise NotFoundError("Task not found")
        if task.user_id != user_id:
            raise UnauthorizedError("Task does not belong to the current user")
        return task
