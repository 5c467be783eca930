# apps/tasks/adapters/orm_repositories.py
from datetime import date
from typing import List, Optional
from django.db import DatabaseError, transaction
from django.db.models import Max
from apps.core.exceptions import NotFoundError, PersistenceError
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import arrange_as_tree
from apps.tasks.ports.repositories import ITaskRepository
from apps.tasks.models import Task as TaskModel

# Pola, które wolno zmieniać przez update()
UPDATABLE_FIELDS = {
    'title', 'completed', 'estimated_minutes', 'total_minutes_spent',
    'planned_date', 'notes', 'order',
}


class DjangoTaskRepository(ITaskRepository):
    def to_entity(self, model: TaskModel) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TaskEntity(
            id=model.id,
            goal_id=model.goal_id,
            user_id=model.user_id,
            title=model.title,
            completed=model.completed,
            estimated_minutes=model.estimated_minutes,
            total_minutes_spent=model.total_minutes_spent,
            planned_date=model.planned_date,
            notes=model.notes,
            is_subtask=model.is_subtask,
            parent_task_id=model.parent_task_id,
            is_ai_generated=model.is_ai_generated,
            order=model.order,
            created_at=model.created_at,
        )

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        try:
            task = TaskModel.objects.get(id=task_id)
            return self.to_entity(task)
        except TaskModel.DoesNotExist:
            return None

    def get_by_goal(self, goal_id: int) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(goal_id=goal_id)
        return arrange_as_tree(self.to_entity(t) for t in qs)

    def get_subtasks(self, parent_task_id: int) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(parent_task_id=parent_task_id, is_subtask=True).order_by('order', 'id')
        return [self.to_entity(t) for t in qs]

    def create(self, task: TaskEntity) -> TaskEntity:
        data = {
            'goal_id': task.goal_id,
            'user_id': task.user_id,
            'title': task.title,
            'completed': task.completed,
            'estimated_minutes': task.estimated_minutes,
            'total_minutes_spent': task.total_minutes_spent,
            'planned_date': task.planned_date,
            'notes': task.notes,
            'is_subtask': task.is_subtask,
            'parent_task_id': task.parent_task_id,
            'is_ai_generated': task.is_ai_generated,
            'order': task.order,
        }
        try:
            obj = TaskModel.objects.create(**data)
        except DatabaseError as e:
            raise PersistenceError(f"Failed to create task '{task.title}': {e}")
        return self.to_entity(obj)

    def update(self, task_id: int, **fields) -> TaskEntity:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        try:
            updated = TaskModel.objects.filter(id=task_id).update(**fields)
        except DatabaseError as e:
            raise PersistenceError(f"Failed to update task {task_id}: {e}")
        if not updated:
            raise NotFoundError("Task not found")
        return self.get_by_id(task_id)

    def delete(self, task_id: int) -> None:
        try:
            TaskModel.objects.filter(id=task_id).delete()
        except DatabaseError as e:
            raise PersistenceError(f"Failed to delete task {task_id}: {e}")

    def next_order(self, goal_id: int) -> int:
        current = TaskModel.objects.filter(goal_id=goal_id).aggregate(m=Max('order'))['m']
        return 0 if current is None else current + 1

    def get_overdue(self, user_id: int, today: date) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(
            user_id=user_id,
            completed=False,
            planned_date__lt=today
        ).order_by('planned_date', 'id')
        return [self.to_entity(t) for t in qs]

    def atomic(self):
        return transaction.atomic()
