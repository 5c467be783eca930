# apps/tasks/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import date
from typing import ContextManager, List, Optional
from apps.tasks.domain.entities import TaskEntity


class ITaskRepository(ABC):
    @abstractmethod
    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        pass

    @abstractmethod
    def get_by_goal(self, goal_id: int) -> List[TaskEntity]:
        """Wszystkie zadania celu (główne i podzadania), wg order, potem id."""
        pass

    @abstractmethod
    def get_subtasks(self, parent_task_id: int) -> List[TaskEntity]:
        pass

    @abstractmethod
    def create(self, task: TaskEntity) -> TaskEntity:
        """Tworzy zadanie i zwraca encję z nadanym ID."""
        pass

    @abstractmethod
    def update(self, task_id: int, **fields) -> TaskEntity:
        """Częściowa aktualizacja (tylko podane pola)."""
        pass

    @abstractmethod
    def delete(self, task_id: int) -> None:
        pass

    @abstractmethod
    def next_order(self, goal_id: int) -> int:
        """Pierwsza wolna pozycja na końcu listy zadań celu."""
        pass

    @abstractmethod
    def get_overdue(self, user_id: int, today: date) -> List[TaskEntity]:
        """Nieukończone zadania z planned_date < today."""
        pass

    @abstractmethod
    def atomic(self) -> ContextManager:
        """Granica transakcji (kilka zapisów widocznych razem albo wcale)."""
        pass

