# apps/goals/adapters/orm_repositories.py
from typing import List, Optional
from django.db import DatabaseError
from apps.core.exceptions import NotFoundError, PersistenceError
from apps.goals.domain.entities import GoalEntity
from apps.goals.ports.repositories import IGoalRepository
from apps.goals.models import Goal as GoalModel


class DjangoGoalRepository(IGoalRepository):
    def to_entity(self, model: GoalModel) -> GoalEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return GoalEntity(
            id=model.id,
            user_id=model.user_id,
            title=model.title,
            description=model.description,
            target_date=model.target_date,
            progress=model.progress,
            total_tasks=model.total_tasks,
            vision_statement=model.vision_statement,
            vision_responses=list(model.vision_responses or []),
            created_at=model.created_at,
        )

    def get_by_id(self, goal_id: int) -> Optional[GoalEntity]:
        try:
            return self.to_entity(GoalModel.objects.get(id=goal_id))
        except GoalModel.DoesNotExist:
            return None

    def create(self, goal: GoalEntity) -> GoalEntity:
        try:
            obj = GoalModel.objects.create(
                user_id=goal.user_id,
                title=goal.title,
                description=goal.description,
                target_date=goal.target_date,
                progress=goal.progress,
                total_tasks=goal.total_tasks,
            )
        except DatabaseError as e:
            raise PersistenceError(f"Failed to create goal: {e}")
        return self.to_entity(obj)

    def update_progress(self, goal_id: int, progress: int) -> GoalEntity:
        try:
            updated = GoalModel.objects.filter(id=goal_id).update(progress=progress)
        except DatabaseError as e:
            raise PersistenceError(f"Failed to update goal {goal_id}: {e}")
        if not updated:
            raise NotFoundError("Goal not found")
        return self.get_by_id(goal_id)

    def update_vision(self, goal_id: int, statement: str, responses: List[str]) -> GoalEntity:
        try:
            updated = GoalModel.objects.filter(id=goal_id).update(
                vision_statement=statement,
                vision_responses=list(responses),
            )
        except DatabaseError as e:
            raise PersistenceError(f"Failed to update goal {goal_id}: {e}")
        if not updated:
            raise NotFoundError("Goal not found")
        return self.get_by_id(goal_id)
