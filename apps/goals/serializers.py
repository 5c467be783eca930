# apps/goals/serializers.py
from typing import Iterable, Optional
from apps.core.http import isoformat
from apps.goals.domain.entities import GoalEntity
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.serializers import task_to_dict


def goal_to_dict(goal: GoalEntity, tasks: Optional[Iterable[TaskEntity]] = None) -> dict:
    data = {
        'id': goal.id,
        'title': goal.title,
        'description': goal.description,
        'targetDate': isoformat(goal.target_date),
        'progress': goal.progress,
        'isCompleted': goal.is_completed,
        'totalTasks': goal.total_tasks,
        'visionStatement': goal.vision_statement,
        'visionResponses': goal.vision_responses,
        'createdAt': isoformat(goal.created_at),
    }
    if tasks is not None:
        data['tasks'] = [task_to_dict(t) for t in tasks]
    return data
