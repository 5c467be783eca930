from contextlib import contextmanager
from dataclasses import replace
from datetime import date
from typing import Dict, List, Optional, Set

import pytest

from apps.core.exceptions import NotFoundError, PersistenceError
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import TaskService, arrange_as_tree
from apps.tasks.ports.repositories import ITaskRepository


class InMemoryTaskRepository(ITaskRepository):
    """Magazyn zadań w pamięci; atomic() przywraca stan po wyjątku."""

    def __init__(self):
        self.tasks: Dict[int, TaskEntity] = {}
        self.created_sequence: List[int] = []
        self._next_id = 1
        self.fail_create_titles: Set[str] = set()
        self.fail_update_ids: Set[int] = set()
        self.fail_delete_ids: Set[int] = set()

    def add(self, **kwargs) -> TaskEntity:
        return self.create(TaskEntity(id=None, **kwargs))

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        task = self.tasks.get(task_id)
        return replace(task) if task else None

    def get_by_goal(self, goal_id: int) -> List[TaskEntity]:
        return arrange_as_tree(replace(t) for t in self.tasks.values() if t.goal_id == goal_id)

    def get_subtasks(self, parent_task_id: int) -> List[TaskEntity]:
        return [replace(t) for t in self.tasks.values() if t.is_subtask and t.parent_task_id == parent_task_id]

    def create(self, task: TaskEntity) -> TaskEntity:
        if task.title in self.fail_create_titles:
            raise PersistenceError(f"Failed to create task '{task.title}'")
        stored = replace(task, id=self._next_id)
        self._next_id += 1
        self.tasks[stored.id] = stored
        self.created_sequence.append(stored.id)
        return replace(stored)

    def update(self, task_id: int, **fields) -> TaskEntity:
        if task_id in self.fail_update_ids:
            raise PersistenceError(f"Failed to update task {task_id}")
        if task_id not in self.tasks:
            raise NotFoundError("Task not found")
        self.tasks[task_id] = replace(self.tasks[task_id], **fields)
        return replace(self.tasks[task_id])

    def delete(self, task_id: int) -> None:
        if task_id in self.fail_delete_ids:
            raise PersistenceError(f"Failed to delete task {task_id}")
        self.tasks.pop(task_id, None)

    def next_order(self, goal_id: int) -> int:
        orders = [t.order for t in self.tasks.values() if t.goal_id == goal_id and t.order is not None]
        return max(orders) + 1 if orders else 0

    def get_overdue(self, user_id: int, today: date) -> List[TaskEntity]:
        return [replace(t) for t in self.tasks.values() if t.user_id == user_id and t.is_overdue(today)]

    @contextmanager
    def atomic(self):
        snapshot = {k: replace(v) for k, v in self.tasks.items()}
        try:
            yield
        except Exception:
            self.tasks = snapshot
            raise


class InMemoryGoalRepository(IGoalRepository):
    def __init__(self):
        self.goals: Dict[int, GoalEntity] = {}
        self.progress_writes = 0
        self._next_id = 1

    def get_by_id(self, goal_id: int) -> Optional[GoalEntity]:
        goal = self.goals.get(goal_id)
        return replace(goal) if goal else None

    def create(self, goal: GoalEntity) -> GoalEntity:
        stored = replace(goal, id=self._next_id)
        self._next_id += 1
        self.goals[stored.id] = stored
        return replace(stored)

    def update_progress(self, goal_id: int, progress: int) -> GoalEntity:
        if goal_id not in self.goals:
            raise NotFoundError("Goal not found")
        self.progress_writes += 1
        self.goals[goal_id] = replace(self.goals[goal_id], progress=progress)
        return replace(self.goals[goal_id])

    def update_vision(self, goal_id: int, statement: str, responses: List[str]) -> GoalEntity:
        if goal_id not in self.goals:
            raise NotFoundError("Goal not found")
        self.goals[goal_id] = replace(
            self.goals[goal_id], vision_statement=statement, vision_responses=list(responses)
        )
        return replace(self.goals[goal_id])


OWNER_ID = 1


@pytest.fixture
def task_repo():
    return InMemoryTaskRepository()


@pytest.fixture
def goal_repo():
    return InMemoryGoalRepository()


@pytest.fixture
def goal(goal_repo):
    return goal_repo.create(GoalEntity(id=None, user_id=OWNER_ID, title="Run a marathon", target_date=date(2030, 1, 1)))


@pytest.fixture
def service(task_repo, goal_repo):
    return TaskService(task_repo, goal_repo)


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username='alice', password='secret')


@pytest.fixture
def other_user(django_user_model):
    return django_user_model.objects.create_user(username='bob', password='secret')


@pytest.fixture
def api_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture(autouse=True)
def offline_text_generator(settings):
    # Testy nigdy nie wołają prawdziwego API
    settings.TEXT_GENERATOR = 'mock'
