# apps/goals/ports/repositories.py
from abc import ABC, abstractmethod
from typing import List, Optional
from apps.goals.domain.entities import GoalEntity


class IGoalRepository(ABC):
    @abstractmethod
    def get_by_id(self, goal_id: int) -> Optional[GoalEntity]:
        pass

    @abstractmethod
    def create(self, goal: GoalEntity) -> GoalEntity:
        pass

    @abstractmethod
    def update_progress(self, goal_id: int, progress: int) -> GoalEntity:
        """Jeden zapis do rekordu celu."""
        pass

    @abstractmethod
    def update_vision(self, goal_id: int, statement: str, responses: List[str]) -> GoalEntity:
        pass
