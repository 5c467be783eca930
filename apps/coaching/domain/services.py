# apps/coaching/domain/services.py
import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.exceptions import UpstreamGenerationError, ValidationError
from apps.coaching.models import DailyQuote, FutureMessage
from apps.coaching.ports.text_generator import ITextGenerator
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import calculate_progress

logger = logging.getLogger(__name__)


def _require_text(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise UpstreamGenerationError(f"AI response is missing '{key}'")
    return value.strip()


class TaskBreakdownService:
    """Rozpisuje cel na zadania główne z podzadaniami (kolejność chronologiczna)."""

    SYSTEM_PROMPT = (
        "You are a goal breakdown assistant that helps users break down their goals "
        "into actionable tasks and subtasks."
    )

    def __init__(self, generator: ITextGenerator, subtasks_per_task: Optional[int] = None):
        self.generator = generator
        self.subtasks_per_task = subtasks_per_task or settings.BREAKDOWN_SUBTASKS_PER_TASK

    def breakdown(self, goal_title: str, task_count: int) -> List[Dict[str, Any]]:
        if task_count <= 0:
            return []

        prompt = (
            f'Break down the following goal into actionable tasks with subtasks:\n'
            f'Goal: "{goal_title}"\n\n'
            f'Generate {task_count} main tasks in the order they should be done, each with exactly '
            f'{self.subtasks_per_task} subtasks that are specific, actionable and measurable.\n'
            f'Respond with a JSON object in this format:\n'
            '{"tasks": [{"title": "Main task 1", "subtasks": '
            '[{"title": "Subtask 1", "estimatedMinutes": 30}]}]}'
        )
        data = self.generator.generate_json(self.SYSTEM_PROMPT, prompt)

        tasks = data.get('tasks')
        if not isinstance(tasks, list):
            raise UpstreamGenerationError("AI response is missing the task list")

        entries = [t for t in tasks if isinstance(t, Mapping)]
        if len(entries) != len(tasks):
            logger.warning("Dropped %s non-object breakdown entries", len(tasks) - len(entries))

        # Model potrafi zwrócić więcej niż prosiliśmy
        return entries[:task_count]


class CoachingService:
    SYSTEM_PROMPT = (
        "You are a supportive and knowledgeable AI coach that helps users achieve their goals "
        "by providing actionable advice and motivation."
    )

    def __init__(self, generator: ITextGenerator):
        self.generator = generator

    def advice(self, goal: GoalEntity, tasks: Sequence[TaskEntity]) -> Dict[str, str]:
        completed = sum(1 for t in tasks if t.completed)
        progress = calculate_progress(completed, len(tasks))
        upcoming = "\n".join(f"- {t.title}" for t in tasks if not t.completed) or "- (none)"

        prompt = (
            f'As an AI coach, provide personalized advice for the following goal and progress:\n\n'
            f'Goal: "{goal.title}"\n'
            f'Progress: {progress}% complete ({completed}/{len(tasks)} tasks completed)\n\n'
            f'Upcoming tasks:\n{upcoming}\n\n'
            'Please provide:\n'
            '1. A short motivational message based on current progress\n'
            '2. Actionable advice for tackling the next tasks\n'
            '3. A productivity tip relevant to the goal type\n\n'
            'Format the response as a JSON object: {"motivation": "...", "advice": "...", "tip": "..."}'
        )
        data = self.generator.generate_json(self.SYSTEM_PROMPT, prompt)

        return {key: _require_text(data, key) for key in ('motivation', 'advice', 'tip')}


class QuoteService:
    """Jeden cytat na cel na dzień; generowany leniwie przy pierwszym odczycie."""

    def __init__(self, generator: ITextGenerator):
        self.generator = generator

    def today_quote(self, user_id: int, goal: GoalEntity, today: Optional[date] = None) -> DailyQuote:
        today = today or timezone.localdate()

        existing = DailyQuote.objects.filter(user_id=user_id, goal_id=goal.id, day=today).first()
        if existing:
            return existing

        quote = self._generate(goal)
        try:
            with transaction.atomic():
                return DailyQuote.objects.create(user_id=user_id, goal_id=goal.id, day=today, quote=quote)
        except IntegrityError:
            # Równoległe żądanie zdążyło zapisać cytat na dziś
            return DailyQuote.objects.get(user_id=user_id, goal_id=goal.id, day=today)

    def mark_read(self, user_id: int, goal_id: int, today: Optional[date] = None) -> int:
        today = today or timezone.localdate()
        return DailyQuote.objects.filter(user_id=user_id, goal_id=goal_id, day=today).update(is_read=True)

    def _generate(self, goal: GoalEntity) -> str:
        context = {
            'title': goal.title,
            'description': goal.description,
            'progress': goal.progress,
            'totalTasks': goal.total_tasks,
            'visionStatement': goal.vision_statement,
        }
        system_prompt = (
            "You are an AI motivational coach, creating a powerful and inspiring daily quote "
            "specific to the user's goal.\n"
            "Rules:\n"
            "1. Write a quote between 15-30 words\n"
            "2. Make it specific to their goal and current progress\n"
            "3. Be encouraging and action-oriented\n\n"
            f"Goal Context:\n{json.dumps(context, indent=2)}\n\n"
            'Respond with a JSON object in this exact format: {"quote": "your motivational quote here"}'
        )
        data = self.generator.generate_json(system_prompt, "")
        return _require_text(data, 'quote')


class FutureMessageService:
    """Codzienna wiadomość od "przyszłego siebie" oparta na postępie wszystkich celów."""

    SYSTEM_PROMPT = (
        "You are the user's future successful self, writing a heartfelt message back in time "
        "to motivate them.\n"
        "Rules:\n"
        "1. Write a message between 40-60 words\n"
        "2. Be specific about their current goals and aspirations\n"
        "3. Use an encouraging, warm and optimistic tone\n"
        "4. Add line breaks between paragraphs\n\n"
        "Current Goals Context:\n{context}\n\n"
        'Respond with a JSON object in this exact format: {{"message": "your motivational message here"}}'
    )

    def __init__(self, generator: ITextGenerator):
        self.generator = generator

    def today_message(
            self,
            user_id: int,
            goals: Sequence[GoalEntity],
            today: Optional[date] = None
        ) -> FutureMessage:
        today = today or timezone.localdate()

        existing = FutureMessage.objects.filter(user_id=user_id, day=today).first()
        if existing:
            return existing

        context = [
            {'title': g.title, 'progress': g.progress, 'totalTasks': g.total_tasks}
            for g in goals
        ]
        data = self.generator.generate_json(
            self.SYSTEM_PROMPT.format(context=json.dumps(context, indent=2)), ""
        )
        message = _require_text(data, 'message')

        try:
            with transaction.atomic():
                return FutureMessage.objects.create(user_id=user_id, day=today, message=message)
        except IntegrityError:
            return FutureMessage.objects.get(user_id=user_id, day=today)

    def mark_read(self, user_id: int, today: Optional[date] = None) -> int:
        today = today or timezone.localdate()
        return FutureMessage.objects.filter(user_id=user_id, day=today).update(is_read=True)


class VisionService:
    QUESTIONS = (
        "What inspired you to set this goal? What's the deeper reason behind it?",
        "How will achieving this goal change your life or impact others around you?",
        "What does success look like for you with this goal? Be specific.",
        "What strengths and personal experiences will help you achieve this goal?",
    )
    SYSTEM_PROMPT = (
        "You are a coach who turns a person's reflections into a short, vivid vision statement "
        "written in the first person, present tense."
    )

    def __init__(self, generator: ITextGenerator, goal_repository: IGoalRepository):
        self.generator = generator
        self.goal_repository = goal_repository

    def generate(self, goal: GoalEntity, answers: Sequence[Any]) -> GoalEntity:
        if not isinstance(answers, (list, tuple)) or len(answers) != len(self.QUESTIONS):
            raise ValidationError(f"Exactly {len(self.QUESTIONS)} answers are required")
        cleaned = [a.strip() if isinstance(a, str) else '' for a in answers]
        if not all(cleaned):
            raise ValidationError("All answers must be non-empty")

        qa = "\n\n".join(f"Q: {q}\nA: {a}" for q, a in zip(self.QUESTIONS, cleaned))
        prompt = (
            f'Goal: "{goal.title}"\n\n{qa}\n\n'
            'Write a vision statement of 3-5 sentences. '
            'Respond with a JSON object: {"vision": "..."}'
        )
        data = self.generator.generate_json(self.SYSTEM_PROMPT, prompt)
        statement = _require_text(data, 'vision')

        logger.info("Goal %s: vision statement generated", goal.id)
        return self.goal_repository.update_vision(goal.id, statement, cleaned)
