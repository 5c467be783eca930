from datetime import date
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from apps.core.exceptions import NotFoundError, PersistenceError
from apps.goals.adapters.orm_repositories import DjangoGoalRepository
from apps.goals.models import Goal
from apps.tasks.adapters.orm_repositories import DjangoTaskRepository
from apps.tasks.domain.entities import TaskEntity
from apps.tasks.domain.services import TaskService
from apps.tasks.models import Task

pytestmark = pytest.mark.django_db


@pytest.fixture
def db_goal(user):
    return Goal.objects.create(user=user, title="Learn Polish", target_date=date(2030, 1, 1))


@pytest.fixture
def repo():
    return DjangoTaskRepository()


def make_task(repo, goal, title, **kwargs):
    return repo.create(TaskEntity(id=None, goal_id=goal.id, user_id=goal.user_id, title=title, **kwargs))


def test_create_and_read_back(repo, db_goal):
    task = make_task(repo, db_goal, "Vocabulary", estimated_minutes=15, order=0)

    loaded = repo.get_by_id(task.id)

    assert loaded.title == "Vocabulary"
    assert loaded.estimated_minutes == 15
    assert loaded.created_at is not None


def test_get_by_id_missing_returns_none(repo):
    assert repo.get_by_id(12345) is None


def test_get_by_goal_orders_by_position(repo, db_goal):
    make_task(repo, db_goal, "Second", order=1)
    make_task(repo, db_goal, "First", order=0)

    assert [t.title for t in repo.get_by_goal(db_goal.id)] == ["First", "Second"]


def test_get_by_goal_keeps_subtasks_under_parent(repo, db_goal):
    second = make_task(repo, db_goal, "Second", order=0)
    first = make_task(repo, db_goal, "First", order=1)
    make_task(repo, db_goal, "First.1", is_subtask=True, parent_task_id=first.id, order=2)
    make_task(repo, db_goal, "Second.1", is_subtask=True, parent_task_id=second.id, order=3)

    titles = [t.title for t in repo.get_by_goal(db_goal.id)]

    assert titles == ["Second", "Second.1", "First", "First.1"]


def test_get_subtasks(repo, db_goal):
    parent = make_task(repo, db_goal, "Parent")
    child = make_task(repo, db_goal, "Child", is_subtask=True, parent_task_id=parent.id)
    make_task(repo, db_goal, "Unrelated")

    assert [t.id for t in repo.get_subtasks(parent.id)] == [child.id]


def test_update_changes_only_given_fields(repo, db_goal):
    task = make_task(repo, db_goal, "Task", notes="keep me")

    updated = repo.update(task.id, completed=True)

    assert updated.completed
    assert updated.notes == "keep me"


def test_update_rejects_unknown_fields(repo, db_goal):
    task = make_task(repo, db_goal, "Task")

    with pytest.raises(ValueError):
        repo.update(task.id, user_id=999)


def test_update_missing_task_raises(repo):
    with pytest.raises(NotFoundError):
        repo.update(999, completed=True)


def test_next_order(repo, db_goal):
    assert repo.next_order(db_goal.id) == 0
    make_task(repo, db_goal, "Task", order=7)
    assert repo.next_order(db_goal.id) == 8


def test_get_overdue(repo, db_goal):
    today = date(2030, 6, 1)
    late = make_task(repo, db_goal, "Late", planned_date=date(2030, 5, 1))
    make_task(repo, db_goal, "Done", planned_date=date(2030, 5, 1), completed=True)
    make_task(repo, db_goal, "Today", planned_date=today)

    assert [t.id for t in repo.get_overdue(db_goal.user_id, today)] == [late.id]


def test_database_error_becomes_persistence_error(repo, db_goal):
    with patch.object(Task.objects, 'create', side_effect=DatabaseError("disk full")):
        with pytest.raises(PersistenceError):
            make_task(repo, db_goal, "Task")


def test_goal_progress_update(db_goal):
    goal = DjangoGoalRepository().update_progress(db_goal.id, 42)

    assert goal.progress == 42
    db_goal.refresh_from_db()
    assert db_goal.progress == 42


def test_goal_progress_update_missing_goal():
    with pytest.raises(NotFoundError):
        DjangoGoalRepository().update_progress(999, 10)


def test_engine_delete_leaves_no_orphans_in_database(repo, db_goal):
    parent = make_task(repo, db_goal, "Parent")
    for i in range(2):
        make_task(repo, db_goal, f"Child {i}", is_subtask=True, parent_task_id=parent.id)
    kept = make_task(repo, db_goal, "Kept", completed=True)

    goal = TaskService(repo, DjangoGoalRepository()).delete_task(parent.id, db_goal.user_id)

    assert list(Task.objects.filter(goal=db_goal).values_list('id', flat=True)) == [kept.id]
    assert goal.progress == 100


def test_engine_toggle_rolls_back_cascade_on_failure(repo, db_goal):
    parent = make_task(repo, db_goal, "Parent")
    child = make_task(repo, db_goal, "Child", is_subtask=True, parent_task_id=parent.id)
    service = TaskService(repo, DjangoGoalRepository())

    original_update = repo.update

    def failing_update(task_id, **fields):
        if task_id == child.id:
            raise PersistenceError("boom")
        return original_update(task_id, **fields)

    with patch.object(repo, 'update', side_effect=failing_update):
        with pytest.raises(PersistenceError):
            service.toggle_task_completion(parent.id, True, db_goal.user_id)

    assert not Task.objects.get(id=parent.id).completed
