# apps/tasks/domain/entities.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    goal_id: int
    user_id: int
    title: str
    completed: bool = False

    # Czas
    estimated_minutes: Optional[int] = None  # minuty
    total_minutes_spent: int = 0
    planned_date: Optional[date] = None

    notes: Optional[str] = None

    # Hierarchia (tylko ID, żeby nie wiązać obiektów domenowych z ORM)
    is_subtask: bool = False
    parent_task_id: Optional[int] = None

    is_ai_generated: bool = False
    order: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_main_task(self) -> bool:
        return not self.is_subtask

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id

    def is_overdue(self, today: date) -> bool:
        return not self.completed and self.planned_date is not None and self.planned_date < today
