# apps/tasks/serializers.py
from apps.core.http import isoformat
from apps.tasks.domain.entities import TaskEntity


def task_to_dict(task: TaskEntity) -> dict:
    return {
        'id': task.id,
        'goalId': task.goal_id,
        'title': task.title,
        'completed': task.completed,
        'estimatedMinutes': task.estimated_minutes,
        'totalMinutesSpent': task.total_minutes_spent,
        'plannedDate': isoformat(task.planned_date),
        'notes': task.notes,
        'isSubtask': task.is_subtask,
        'parentTaskId': task.parent_task_id,
        'isAiGenerated': task.is_ai_generated,
        'order': task.order,
        'createdAt': isoformat(task.created_at),
    }


def time_entry_to_dict(entry) -> dict:
    return {
        'id': entry.id,
        'taskId': entry.task_id,
        'startTime': isoformat(entry.start_time),
        'endTime': isoformat(entry.end_time),
        'isActive': entry.is_active,
        'minutes': entry.minutes,
        'coinsEarned': entry.coins_earned,
    }
