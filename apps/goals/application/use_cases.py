# apps/goals/application/use_cases.py
import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from apps.core.exceptions import NotFoundError, UnauthorizedError, UpstreamGenerationError, ValidationError
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import TaskService
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)

MAX_GENERATED_TASKS = 10


def get_owned_goal(goal_repository: IGoalRepository, goal_id: int, user_id: int) -> GoalEntity:
    goal = goal_repository.get_by_id(goal_id)
    if not goal:
        raise NotFoundError("Goal not found")
    if goal.user_id != user_id:
        raise UnauthorizedError("Goal does not belong to the current user")
    return goal


@dataclass
class CreateGoalInput:
    user_id: int
    title: str
    target_date: Optional[date]
    description: Optional[str] = None
    total_tasks: int = 0


@dataclass
class CreateGoalResult:
    goal: GoalEntity
    tasks: List[TaskEntity]
    generation_error: Optional[str] = None


class CreateGoalUseCase:
    """
    Tworzy cel i (opcjonalnie) jego zadania z rozpisania AI.
    Błąd modelu językowego nie blokuje utworzenia celu - cel zostaje bez zadań,
    a komunikat wraca do klienta jako generation_error.
    """

    def __init__(self, goal_repository: IGoalRepository, task_repository: ITaskRepository, breakdown_service):
        self.goal_repository = goal_repository
        self.breakdown_service = breakdown_service
        self.task_service = TaskService(task_repository, goal_repository)

    def execute(self, input_dto: CreateGoalInput) -> CreateGoalResult:
        # 1. Walidacja
        title = (input_dto.title or '').strip()
        if not title:
            raise ValidationError("Goal title cannot be empty")
        if input_dto.target_date is None:
            raise ValidationError("Target date is required")
        total_tasks = input_dto.total_tasks or 0
        if not 0 <= total_tasks <= MAX_GENERATED_TASKS:
            raise ValidationError(f"totalTasks must be between 0 and {MAX_GENERATED_TASKS}")

        # 2. Zapis celu
        goal = self.goal_repository.create(GoalEntity(
            id=None,
            user_id=input_dto.user_id,
            title=title,
            description=input_dto.description,
            target_date=input_dto.target_date,
            total_tasks=total_tasks,
        ))

        if total_tasks == 0:
            return CreateGoalResult(goal=goal, tasks=[])

        # 3. Rozpisanie przez AI
        try:
            breakdown = self.breakdown_service.breakdown(title, total_tasks)
        except UpstreamGenerationError as e:
            logger.warning("Goal %s created without tasks: %s", goal.id, e.message)
            return CreateGoalResult(goal=goal, tasks=[], generation_error=e.message)

        # 4. Zadania + jedno przeliczenie postępu na całą partię
        tasks = self.task_service.create_tasks_from_breakdown(goal.id, input_dto.user_id, breakdown)
        goal = self.task_service.recompute_progress(goal.id)
        return CreateGoalResult(goal=goal, tasks=tasks)
