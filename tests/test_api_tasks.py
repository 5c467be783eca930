import json
from datetime import date, timedelta

import pytest
from django.utils import timezone

from apps.goals.models import Goal
from apps.reports.models import ActivityLog
from apps.tasks.models import Task

pytestmark = pytest.mark.django_db


def send(client, method, url, payload=None):
    body = json.dumps(payload) if payload is not None else ''
    return getattr(client, method)(url, data=body, content_type='application/json')


@pytest.fixture
def db_goal(user):
    return Goal.objects.create(user=user, title="Ship the app", target_date=date(2030, 1, 1))


@pytest.fixture
def tree(db_goal, user):
    """Zadanie główne z dwoma podzadaniami + jedno samodzielne."""
    main = Task.objects.create(goal=db_goal, user=user, title="Build", order=0)
    subs = [
        Task.objects.create(goal=db_goal, user=user, title=f"Build {i}", is_subtask=True, parent_task=main, order=i + 1)
        for i in range(2)
    ]
    solo = Task.objects.create(goal=db_goal, user=user, title="Launch", order=3)
    return main, subs, solo


def test_anonymous_request_is_rejected(client, db_goal):
    response = send(client, 'post', f'/api/goals/{db_goal.id}/tasks/', {'title': 'X'})

    assert response.status_code == 401


def test_wrong_method_is_rejected(api_client):
    assert api_client.put('/api/tasks/overdue/').status_code == 405


def test_create_task(api_client, db_goal):
    response = send(api_client, 'post', f'/api/goals/{db_goal.id}/tasks/', {
        'title': 'Write tests', 'estimatedMinutes': 30, 'plannedDate': '2030-01-02T09:00:00Z',
    })

    assert response.status_code == 201
    data = response.json()
    assert data['task']['title'] == 'Write tests'
    assert data['task']['plannedDate'] == '2030-01-02'
    assert data['goal']['progress'] == 0
    task = Task.objects.get(id=data['task']['id'])
    assert ActivityLog.objects.filter(object_id=task.id, action_type=ActivityLog.ActionType.CREATED).exists()


def test_create_subtask_of_subtask_is_rejected(api_client, db_goal, tree):
    _, subs, _ = tree

    response = send(api_client, 'post', f'/api/goals/{db_goal.id}/tasks/', {
        'title': 'Too deep', 'isSubtask': True, 'parentTaskId': subs[0].id,
    })

    assert response.status_code == 400
    assert 'error' in response.json()


def test_create_task_in_foreign_goal(api_client, other_user):
    foreign = Goal.objects.create(user=other_user, title="Not yours", target_date=date(2030, 1, 1))

    response = send(api_client, 'post', f'/api/goals/{foreign.id}/tasks/', {'title': 'X'})

    assert response.status_code == 403


def test_malformed_json_is_rejected(api_client, db_goal):
    response = api_client.post(f'/api/goals/{db_goal.id}/tasks/', data='{oops', content_type='application/json')

    assert response.status_code == 400
    assert response.json()['error'] == 'Malformed JSON body'


def test_complete_main_task_cascades_and_updates_progress(api_client, db_goal, tree):
    main, subs, _ = tree

    response = send(api_client, 'patch', f'/api/tasks/{main.id}/', {'completed': True})

    assert response.status_code == 200
    assert response.json()['goal']['progress'] == 75
    assert all(Task.objects.get(id=s.id).completed for s in subs)
    assert ActivityLog.objects.filter(object_id=main.id, action_type=ActivityLog.ActionType.COMPLETED).count() == 1


def test_reopen_task_is_logged(api_client, tree):
    main, _, _ = tree
    send(api_client, 'patch', f'/api/tasks/{main.id}/', {'completed': True})

    send(api_client, 'patch', f'/api/tasks/{main.id}/', {'completed': False})

    assert ActivityLog.objects.filter(object_id=main.id, action_type=ActivityLog.ActionType.REOPENED).exists()


def test_patch_rejects_non_boolean_completed(api_client, tree):
    main, _, _ = tree

    response = send(api_client, 'patch', f'/api/tasks/{main.id}/', {'completed': 'yes'})

    assert response.status_code == 400


def test_patch_edits_fields(api_client, tree):
    _, _, solo = tree

    response = send(api_client, 'patch', f'/api/tasks/{solo.id}/', {'title': 'Launch v2', 'notes': 'Friday'})

    assert response.status_code == 200
    solo.refresh_from_db()
    assert (solo.title, solo.notes) == ('Launch v2', 'Friday')
    entry = ActivityLog.objects.get(object_id=solo.id, action_type=ActivityLog.ActionType.UPDATED)
    assert entry.details == {'fields': ['notes', 'title']}


def test_patch_with_same_values_is_not_logged(api_client, tree):
    _, _, solo = tree

    send(api_client, 'patch', f'/api/tasks/{solo.id}/', {'title': solo.title})

    assert not ActivityLog.objects.filter(object_id=solo.id, action_type=ActivityLog.ActionType.UPDATED).exists()


def test_patch_missing_task(api_client):
    assert send(api_client, 'patch', '/api/tasks/999/', {'title': 'X'}).status_code == 404


def test_delete_main_task_removes_subtasks(api_client, db_goal, tree):
    main, subs, solo = tree
    Task.objects.filter(id=solo.id).update(completed=True)

    response = api_client.delete(f'/api/tasks/{main.id}/')

    assert response.status_code == 200
    assert list(Task.objects.filter(goal=db_goal).values_list('id', flat=True)) == [solo.id]
    assert response.json()['goal']['progress'] == 100
    assert ActivityLog.objects.filter(object_id=main.id, action_type=ActivityLog.ActionType.DELETED).exists()


def test_delete_foreign_task(client, other_user, tree):
    main, _, _ = tree
    client.force_login(other_user)

    response = client.delete(f'/api/tasks/{main.id}/')

    assert response.status_code == 403
    assert Task.objects.filter(id=main.id).exists()


def test_reorder(api_client, db_goal, tree):
    main, _, solo = tree

    response = send(api_client, 'post', f'/api/goals/{db_goal.id}/tasks/reorder/', {'ids': [solo.id, main.id]})

    assert response.status_code == 200
    assert Task.objects.get(id=solo.id).order == 0
    assert Task.objects.get(id=main.id).order == 1


def test_reorder_rejects_incomplete_list(api_client, db_goal, tree):
    main, _, _ = tree

    response = send(api_client, 'post', f'/api/goals/{db_goal.id}/tasks/reorder/', {'ids': [main.id]})

    assert response.status_code == 400


def test_overdue_and_move_to_today(api_client, db_goal, user):
    today = timezone.localdate()
    late = Task.objects.create(goal=db_goal, user=user, title="Late", planned_date=today - timedelta(days=2))
    Task.objects.create(goal=db_goal, user=user, title="Upcoming", planned_date=today + timedelta(days=2))

    overdue = api_client.get('/api/tasks/overdue/').json()['tasks']
    assert [t['id'] for t in overdue] == [late.id]

    response = api_client.post('/api/tasks/overdue/move-to-today/')

    assert response.json()['moved'] == 1
    late.refresh_from_db()
    assert late.planned_date == today
    assert api_client.get('/api/tasks/overdue/').json()['tasks'] == []


def test_search(api_client, db_goal, tree, other_user):
    main, subs, solo = tree
    Task.objects.filter(id=subs[0].id).update(completed=True)
    foreign_goal = Goal.objects.create(user=other_user, title="Other", target_date=date(2030, 1, 1))
    Task.objects.create(goal=foreign_goal, user=other_user, title="Build elsewhere")

    titles = [t['title'] for t in api_client.get('/api/tasks/search/', {'title': 'build'}).json()['tasks']]
    assert titles == ['Build', 'Build 0', 'Build 1']

    done = api_client.get('/api/tasks/search/', {'completed': 'true'}).json()['tasks']
    assert [t['id'] for t in done] == [subs[0].id]

    mains = api_client.get('/api/tasks/search/', {'is_subtask': 'false'}).json()['tasks']
    assert [t['id'] for t in mains] == [main.id, solo.id]


def test_search_rejects_invalid_filter(api_client):
    response = api_client.get('/api/tasks/search/', {'planned_after': 'not-a-date'})

    assert response.status_code == 400
