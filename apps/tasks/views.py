# apps/tasks/views.py
from django.http import JsonResponse
from django.utils import timezone
from apps.core.exceptions import ValidationError
from apps.core.http import api_view, form_errors, parse_json_body, parse_optional_date, parse_optional_int
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.serializers import goal_to_dict
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .adapters.orm_repositories import DjangoTaskRepository
from .application.use_cases import (
    CreateTaskInput, CreateTaskUseCase,
    UpdateTaskInput, UpdateTaskUseCase,
    ReorderTasksUseCase, RescheduleOverdueUseCase,
)
from .domain.services import TaskService
from .filters import TaskFilter
from .models import Task
from .serializers import task_to_dict, time_entry_to_dict
from .services.time_tracking import TimeTrackingService


def _parse_task_changes(data: dict) -> dict:
    """JSON (camelCase) -> pola zadania; tylko klucze obecne w żądaniu."""
    changes = {}
    if 'title' in data:
        changes['title'] = data['title'] if isinstance(data['title'], str) else ''
    if 'estimatedMinutes' in data:
        changes['estimated_minutes'] = parse_optional_int(data['estimatedMinutes'], 'estimatedMinutes')
        if changes['estimated_minutes'] is not None and changes['estimated_minutes'] < 0:
            raise ValidationError("estimatedMinutes cannot be negative")
    if 'plannedDate' in data:
        changes['planned_date'] = parse_optional_date(data['plannedDate'], 'plannedDate')
    if 'notes' in data:
        changes['notes'] = data['notes']
    if 'completed' in data:
        if not isinstance(data['completed'], bool):
            raise ValidationError("completed must be a boolean")
        changes['completed'] = data['completed']
    return changes


@api_view(["POST"])
def task_create_view(request, goal_id):
    """Ręczne dodanie zadania / podzadania do celu."""
    data = parse_json_body(request)
    changes = _parse_task_changes(data)

    # 1. Przygotowanie DTO
    input_dto = CreateTaskInput(
        goal_id=goal_id,
        user_id=request.user.id,
        title=changes.get('title', ''),
        is_subtask=bool(data.get('isSubtask', False)),
        parent_task_id=parse_optional_int(data.get('parentTaskId'), 'parentTaskId'),
        estimated_minutes=changes.get('estimated_minutes'),
        planned_date=changes.get('planned_date'),
        notes=changes.get('notes'),
    )

    # 2. Złożenie Use Case (Manual Dependency Injection)
    goal_repo = DjangoGoalRepository()
    use_case = CreateTaskUseCase(repository=DjangoTaskRepository(), goal_repository=goal_repo)

    # 3. Wykonanie logiki biznesowej
    task = use_case.execute(input_dto)
    return JsonResponse({
        'task': task_to_dict(task),
        'goal': goal_to_dict(goal_repo.get_by_id(goal_id)),
    }, status=201)


@api_view(["PATCH", "DELETE"])
def task_detail_view(request, task_id):
    task_repo = DjangoTaskRepository()
    goal_repo = DjangoGoalRepository()

    if request.method == "DELETE":
        task = task_repo.get_by_id(task_id)
        goal = TaskService(task_repo, goal_repo).delete_task(task_id, request.user.id)

        ActivityLogger.log_for(
            request.user, Task, task.id,
            ActivityLog.ActionType.DELETED,
            f"Usunięto zadanie: {task.title}"
        )
        return JsonResponse({'goal': goal_to_dict(goal)})

    changes = _parse_task_changes(parse_json_body(request))
    before = task_repo.get_by_id(task_id)

    use_case = UpdateTaskUseCase(repository=task_repo, goal_repository=goal_repo)
    task = use_case.execute(UpdateTaskInput(task_id=task_id, user_id=request.user.id, changes=changes))

    # update() na QuerySet nie wysyła post_save - zmianę stanu logujemy tutaj
    if before.completed != task.completed:
        ActivityLogger.log_for(
            request.user, Task, task.id,
            ActivityLog.ActionType.COMPLETED if task.completed else ActivityLog.ActionType.REOPENED,
            "Zadanie ukończone! 🎉" if task.completed else f"Przywrócono zadanie: {task.title}",
            details={'old_completed': before.completed, 'new_completed': task.completed}
        )

    edited = sorted(k for k in changes if k != 'completed' and getattr(before, k) != getattr(task, k))
    if edited:
        ActivityLogger.log_for(
            request.user, Task, task.id,
            ActivityLog.ActionType.UPDATED,
            f"Zmieniono zadanie: {task.title}",
            details={'fields': edited}
        )

    return JsonResponse({
        'task': task_to_dict(task),
        'goal': goal_to_dict(goal_repo.get_by_id(task.goal_id)),
    })


@api_view(["POST"])
def task_reorder_view(request, goal_id):
    data = parse_json_body(request)
    ids = data.get('ids')
    if not isinstance(ids, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in ids):
        raise ValidationError("ids must be a list of task ids")

    use_case = ReorderTasksUseCase(repository=DjangoTaskRepository(), goal_repository=DjangoGoalRepository())
    tasks = use_case.execute(goal_id, request.user.id, ids)
    return JsonResponse({'tasks': [task_to_dict(t) for t in tasks]})


@api_view(["GET"])
def overdue_tasks_view(request):
    tasks = DjangoTaskRepository().get_overdue(request.user.id, timezone.localdate())
    return JsonResponse({'tasks': [task_to_dict(t) for t in tasks]})


@api_view(["POST"])
def overdue_move_to_today_view(request):
    """Przenosi wszystkie zaległe zadania na dziś."""
    use_case = RescheduleOverdueUseCase(repository=DjangoTaskRepository())
    tasks = use_case.execute(request.user.id, timezone.localdate())
    return JsonResponse({'moved': len(tasks), 'tasks': [task_to_dict(t) for t in tasks]})


@api_view(["GET"])
def task_search_view(request):
    qs = Task.objects.filter(user=request.user).order_by('goal_id', 'order', 'id')

    f = TaskFilter(request.GET, queryset=qs)
    if not f.is_valid():
        raise ValidationError("Invalid search filters", details=form_errors(f.form))

    repo = DjangoTaskRepository()
    return JsonResponse({'tasks': [task_to_dict(repo.to_entity(t)) for t in f.qs]})


@api_view(["GET"])
def timer_current_view(request):
    entry = TimeTrackingService().current(request.user.id)
    return JsonResponse({'timer': time_entry_to_dict(entry) if entry else None})


@api_view(["POST"])
def timer_start_view(request, task_id):
    entry = TimeTrackingService().start(task_id, request.user.id)
    return JsonResponse({'timer': time_entry_to_dict(entry)}, status=201)


@api_view(["POST"])
def timer_stop_view(request, task_id):
    service = TimeTrackingService()
    entry = service.stop(task_id, request.user.id)
    return JsonResponse({
        'timer': time_entry_to_dict(entry),
        'coins': service.reward_service.get_balance(request.user.id),
    })
