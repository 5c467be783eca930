# apps/tasks/application/use_cases.py
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional
from apps.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from apps.goals.application.use_cases import get_owned_goal
from apps.goals.ports.repositories import IGoalRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import TaskService
from apps.tasks.ports.repositories import ITaskRepository


@dataclass
class CreateTaskInput:
    goal_id: int
    user_id: int
    title: str
    is_subtask: bool = False
    parent_task_id: Optional[int] = None
    estimated_minutes: Optional[int] = None
    planned_date: Optional[date] = None
    notes: Optional[str] = None


class CreateTaskUseCase:
    """Ręczne dodanie zadania lub podzadania do celu."""

    def __init__(self, repository: ITaskRepository, goal_repository: IGoalRepository):
        self.repository = repository
        self.goal_repository = goal_repository
        self.service = TaskService(repository, goal_repository)

    def execute(self, input_dto: CreateTaskInput) -> TaskEntity:
        title = (input_dto.title or '').strip()
        if not title:
            raise ValidationError("Task title cannot be empty")

        get_owned_goal(self.goal_repository, input_dto.goal_id, input_dto.user_id)

        # Podzadanie <=> jest rodzic
        is_subtask = input_dto.is_subtask or input_dto.parent_task_id is not None
        if is_subtask:
            self._validate_parent(input_dto)

        task = self.repository.create(TaskEntity(
            id=None,
            goal_id=input_dto.goal_id,
            user_id=input_dto.user_id,
            title=title,
            estimated_minutes=input_dto.estimated_minutes,
            planned_date=input_dto.planned_date,
            notes=input_dto.notes,
            is_subtask=is_subtask,
            parent_task_id=input_dto.parent_task_id if is_subtask else None,
            order=self.repository.next_order(input_dto.goal_id),
        ))

        # Nowe (nieukończone) zadanie zmienia mianownik postępu
        self.service.recompute_progress(input_dto.goal_id)
        return task

    def _validate_parent(self, input_dto: CreateTaskInput):
        if input_dto.parent_task_id is None:
            raise ValidationError("Subtask requires parentTaskId")

        parent = self.repository.get_by_id(input_dto.parent_task_id)
        if not parent or parent.goal_id != input_dto.goal_id:
            raise ValidationError("Parent task must belong to the same goal")
        if parent.is_subtask:
            # Maks. 2 poziomy: cel -> zadanie -> podzadanie
            raise ValidationError("Subtasks cannot have subtasks")


@dataclass
class UpdateTaskInput:
    task_id: int
    user_id: int
    # Tylko klucze obecne w żądaniu (PATCH)
    changes: Dict[str, Any] = field(default_factory=dict)


class UpdateTaskUseCase:
    EDITABLE = ('title', 'estimated_minutes', 'planned_date', 'notes')

    def __init__(self, repository: ITaskRepository, goal_repository: IGoalRepository):
        self.repository = repository
        self.service = TaskService(repository, goal_repository)

    def execute(self, input_dto: UpdateTaskInput) -> TaskEntity:
        changes = dict(input_dto.changes)
        completed = changes.pop('completed', None)

        task = self.repository.get_by_id(input_dto.task_id)
        if not task:
            raise NotFoundError("Task not found")
        if not task.is_owned_by(input_dto.user_id):
            raise UnauthorizedError("Task does not belong to the current user")

        edits = {k: v for k, v in changes.items() if k in self.EDITABLE}
        if 'title' in edits:
            edits['title'] = (edits['title'] or '').strip()
            if not edits['title']:
                raise ValidationError("Task title cannot be empty")

        if edits:
            task = self.repository.update(task.id, **edits)

        # Zmiana stanu ukończenia zawsze przez silnik (kaskada + postęp)
        if completed is not None:
            task = self.service.toggle_task_completion(task.id, bool(completed), input_dto.user_id)

        return task


class ReorderTasksUseCase:
    """Zapisuje nową kolejność zadań głównych celu (drag & drop na liście)."""

    def __init__(self, repository: ITaskRepository, goal_repository: IGoalRepository):
        self.repository = repository
        self.goal_repository = goal_repository

    def execute(self, goal_id: int, user_id: int, task_ids: List[int]) -> List[TaskEntity]:
        get_owned_goal(self.goal_repository, goal_id, user_id)

        main_tasks = {t.id: t for t in self.repository.get_by_goal(goal_id) if t.is_main_task}
        if len(set(task_ids)) != len(task_ids):
            raise ValidationError("Duplicate task ids in ordering")
        if set(task_ids) != set(main_tasks):
            raise ValidationError("Ordering must list every main task of the goal exactly once")

        with self.repository.atomic():
            return [self.repository.update(task_id, order=position) for position, task_id in enumerate(task_ids)]


class RescheduleOverdueUseCase:
    """Przenosi wszystkie zaległe (nieukończone) zadania usera na dziś."""

    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def execute(self, user_id: int, today: date) -> List[TaskEntity]:
        overdue = self.repository.get_overdue(user_id, today)
        with self.repository.atomic():
            return [self.repository.update(t.id, planned_date=today) for t in overdue]
