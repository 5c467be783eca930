# apps/notes/views.py
from django.http import HttpResponse, JsonResponse
from apps.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from apps.core.http import api_view, form_errors, isoformat, parse_json_body, parse_optional_int
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.application.use_cases import get_owned_goal
from apps.tasks.models import Task
from .forms import NoteForm
from .models import Note


def note_to_dict(note: Note) -> dict:
    return {
        'id': note.id,
        'goalId': note.goal_id,
        'taskId': note.task_id,
        'title': note.title,
        'content': note.content,
        'createdAt': isoformat(note.created_at),
        'updatedAt': isoformat(note.updated_at),
    }


def _get_owned_note(note_id, user) -> Note:
    try:
        note = Note.objects.get(id=note_id)
    except Note.DoesNotExist:
        raise NotFoundError("Note not found")
    if note.user_id != user.id:
        raise UnauthorizedError("Note does not belong to the current user")
    return note


def _resolve_task_id(data, goal_id):
    task_id = parse_optional_int(data.get('taskId'), 'taskId')
    if task_id is not None and not Task.objects.filter(id=task_id, goal_id=goal_id).exists():
        raise ValidationError("Task must belong to the same goal")
    return task_id



@api_view(["GET", "POST"])
def goal_notes_view(request, goal_id):
    goal = get_owned_goal(DjangoGoalRepository(), goal_id, request.user.id)

    if request.method == "GET":
        notes = Note.objects.filter(goal_id=goal.id, user=request.user)
        return JsonResponse({'notes': [note_to_dict(n) for n in notes]})

    data = parse_json_body(request)
    form = NoteForm(data)
    if not form.is_valid():
        raise ValidationError("Invalid note", details=form_errors(form))

    note = form.save(commit=False)
    note.user = request.user
    note.goal_id = goal.id
    note.task_id = _resolve_task_id(data, goal.id)
    note.save()
    return JsonResponse(note_to_dict(note), status=201)


@api_view(["PUT", "DELETE"])
def note_detail_view(request, note_id):
    note = _get_owned_note(note_id, request.user)

    if request.method == "DELETE":
        note.delete()
        return HttpResponse(status=204)

    data = parse_json_body(request)
    form = NoteForm(data, instance=note)
    if not form.is_valid():
        raise ValidationError("Invalid note", details=form_errors(form))

    note = form.save(commit=False)
    if 'taskId' in data:
        note.task_id = _resolve_task_id(data, note.goal_id)
    note.save()
    return JsonResponse(note_to_dict(note))
