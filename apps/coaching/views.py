# apps/coaching/views.py
from django.http import JsonResponse
from apps.core.http import api_view, isoformat, parse_json_body
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.application.use_cases import get_owned_goal
from apps.goals.models import Goal
from apps.goals.serializers import goal_to_dict
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from .adapters.factory import get_text_generator
from .domain.services import CoachingService, FutureMessageService, QuoteService, VisionService


@api_view(["GET"])
def coaching_view(request, goal_id):
    goal = get_owned_goal(DjangoGoalRepository(), goal_id, request.user.id)
    tasks = DjangoTaskRepository().get_by_goal(goal.id)

    advice = CoachingService(get_text_generator()).advice(goal, tasks)
    return JsonResponse(advice)


@api_view(["GET"])
def daily_quote_view(request, goal_id):
    goal = get_owned_goal(DjangoGoalRepository(), goal_id, request.user.id)

    quote = QuoteService(get_text_generator()).today_quote(request.user.id, goal)
    return JsonResponse({
        'quote': quote.quote,
        'isRead': quote.is_read,
        'date': isoformat(quote.day),
    })


@api_view(["POST"])
def daily_quote_read_view(request, goal_id):
    goal = get_owned_goal(DjangoGoalRepository(), goal_id, request.user.id)

    QuoteService(get_text_generator()).mark_read(request.user.id, goal.id)
    return JsonResponse({'isRead': True})


@api_view(["POST"])
def vision_view(request, goal_id):
    goal_repo = DjangoGoalRepository()
    goal = get_owned_goal(goal_repo, goal_id, request.user.id)
    data = parse_json_body(request)

    goal = VisionService(get_text_generator(), goal_repo).generate(goal, data.get('answers'))
    return JsonResponse(goal_to_dict(goal))


@api_view(["GET"])
def future_message_view(request):
    goal_repo = DjangoGoalRepository()
    goals = [goal_repo.to_entity(g) for g in Goal.objects.filter(user=request.user)]

    message = FutureMessageService(get_text_generator()).today_message(request.user.id, goals)
    return JsonResponse({
        'message': message.message,
        'isRead': message.is_read,
        'date': isoformat(message.day),
    })


@api_view(["POST"])
def future_message_read_view(request):
    FutureMessageService(get_text_generator()).mark_read(request.user.id)
    return JsonResponse({'isRead': True})
