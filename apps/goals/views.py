# apps/goals/views.py
import logging
from django.http import HttpResponse, JsonResponse
from apps.coaching.adapters.factory import get_text_generator
from apps.coaching.domain.services import TaskBreakdownService
from apps.core.exceptions import ValidationError
from apps.core.http import api_view, form_errors, parse_json_body, parse_optional_date
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.domain.services import arrange_as_tree
from .adapters.orm_repositories import DjangoGoalRepository
from .application.use_cases import CreateGoalInput, CreateGoalUseCase, get_owned_goal
from .forms import GoalForm, GoalUpdateForm
from .models import Goal
from .serializers import goal_to_dict

logger = logging.getLogger(__name__)

# Klucze JSON (camelCase frontendu) -> pola formularza
FIELD_MAP = {
    'title': 'title',
    'description': 'description',
    'targetDate': 'target_date',
    'totalTasks': 'total_tasks',
    'visionStatement': 'vision_statement',
}


def _form_data(data: dict) -> dict:
    form_data = {}
    for key, field_name in FIELD_MAP.items():
        if key in data:
            value = data[key]
            if field_name == 'target_date':
                value = parse_optional_date(value, 'targetDate')
            form_data[field_name] = value
    return form_data


@api_view(["GET", "POST"])
def goal_list_view(request):
    """Lista celów użytkownika z zadaniami / utworzenie celu."""
    goal_repo = DjangoGoalRepository()
    task_repo = DjangoTaskRepository()

    if request.method == "GET":
        goals = Goal.objects.filter(user=request.user).prefetch_related('tasks')
        return JsonResponse({'goals': [
            goal_to_dict(goal_repo.to_entity(g), arrange_as_tree(task_repo.to_entity(t) for t in g.tasks.all()))
            for g in goals
        ]})

    # 1. Walidacja wejścia formularzem
    form = GoalForm(_form_data(parse_json_body(request)))
    if not form.is_valid():
        raise ValidationError("Invalid goal", details=form_errors(form))

    # 2. Use Case (Manual Dependency Injection)
    use_case = CreateGoalUseCase(
        goal_repository=goal_repo,
        task_repository=task_repo,
        breakdown_service=TaskBreakdownService(get_text_generator()),
    )
    result = use_case.execute(CreateGoalInput(
        user_id=request.user.id,
        title=form.cleaned_data['title'],
        description=form.cleaned_data.get('description'),
        target_date=form.cleaned_data['target_date'],
        total_tasks=form.cleaned_data.get('total_tasks') or 0,
    ))

    body = goal_to_dict(result.goal, result.tasks)
    if result.generation_error:
        body['generationError'] = result.generation_error
    return JsonResponse(body, status=201)


@api_view(["GET", "PATCH", "DELETE"])
def goal_detail_view(request, goal_id):
    goal_repo = DjangoGoalRepository()
    task_repo = DjangoTaskRepository()
    goal = get_owned_goal(goal_repo, goal_id, request.user.id)

    if request.method == "GET":
        return JsonResponse(goal_to_dict(goal, task_repo.get_by_goal(goal.id)))

    instance = Goal.objects.get(id=goal.id)

    if request.method == "DELETE":
        # Zadania lecą kaskadą FK; przeliczanie postępu nie ma sensu
        instance.delete()
        logger.info("Goal %s deleted by user %s", goal.id, request.user.id)
        return HttpResponse(status=204)

    form = GoalUpdateForm(_form_data(parse_json_body(request)), instance=instance)
    if not form.is_valid():
        raise ValidationError("Invalid goal", details=form_errors(form))
    form.save()

    return JsonResponse(goal_to_dict(goal_repo.get_by_id(goal.id), task_repo.get_by_goal(goal.id)))
