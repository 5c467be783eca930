# apps/goals/domain/entities.py
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass
class GoalEntity:
    id: Optional[int]
    user_id: int
    title: str
    description: Optional[str] = None
    target_date: Optional[date] = None
    progress: int = 0  # 0 - 100 (wyliczane przez TaskService.recompute_progress)
    total_tasks: int = 0
    vision_statement: Optional[str] = None
    vision_responses: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.progress == 100
