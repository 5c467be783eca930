from datetime import date, timedelta

import pytest
from django.core.management import call_command
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.core.exceptions import ConflictError, InsufficientCoinsError, NotFoundError, UnauthorizedError
from apps.goals.models import Goal
from apps.rewards.models import PurchasedReward, RewardBalance, RewardItem
from apps.rewards.services import RewardService
from apps.tasks.models import Task, TimeEntry
from apps.tasks.services.time_tracking import TimeTrackingService

pytestmark = pytest.mark.django_db


@pytest.fixture
def task(user):
    goal = Goal.objects.create(user=user, title="Write a book", target_date=date(2030, 1, 1))
    return Task.objects.create(goal=goal, user=user, title="Chapter 1")


@pytest.fixture
def other_task(task, user):
    return Task.objects.create(goal=task.goal, user=user, title="Chapter 2")


class TestTimeTracking:
    def test_start_creates_active_entry(self, task, user):
        entry = TimeTrackingService().start(task.id, user.id)

        assert entry.is_active
        assert TimeTrackingService().current(user.id) == entry

    def test_second_timer_conflicts(self, task, other_task, user):
        service = TimeTrackingService()
        service.start(task.id, user.id)

        with pytest.raises(ConflictError):
            service.start(other_task.id, user.id)
        assert TimeEntry.objects.filter(user=user, is_active=True).count() == 1

    def test_database_allows_only_one_active_timer(self, task, other_task, user):
        TimeEntry.objects.create(user=user, task=task, start_time=timezone.now())

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                TimeEntry.objects.create(user=user, task=other_task, start_time=timezone.now())

    def test_stop_adds_minutes_and_awards_coins(self, task, user, settings):
        settings.COINS_PER_MINUTE = 2
        service = TimeTrackingService()
        entry = service.start(task.id, user.id)
        TimeEntry.objects.filter(id=entry.id).update(start_time=timezone.now() - timedelta(minutes=25, seconds=30))

        stopped = service.stop(task.id, user.id)

        assert not stopped.is_active
        assert stopped.minutes == 25
        assert stopped.coins_earned == 50
        task.refresh_from_db()
        assert task.total_minutes_spent == 25
        assert RewardService().get_balance(user.id) == 50
        assert service.current(user.id) is None

    def test_stop_without_active_timer(self, task, user):
        with pytest.raises(NotFoundError):
            TimeTrackingService().stop(task.id, user.id)

    def test_cannot_time_foreign_task(self, task, other_user):
        with pytest.raises(UnauthorizedError):
            TimeTrackingService().start(task.id, other_user.id)

    def test_timer_endpoints(self, api_client, task):
        assert api_client.get('/api/timer/current/').json() == {'timer': None}

        started = api_client.post(f'/api/tasks/{task.id}/timer/start/')
        assert started.status_code == 201
        assert api_client.get('/api/timer/current/').json()['timer']['taskId'] == task.id
        assert api_client.post(f'/api/tasks/{task.id}/timer/start/').status_code == 409

        stopped = api_client.post(f'/api/tasks/{task.id}/timer/stop/')
        assert stopped.status_code == 200
        assert stopped.json()['timer']['isActive'] is False
        assert stopped.json()['coins'] == 0


class TestRewards:
    def test_award_accumulates(self, user):
        service = RewardService()

        service.award(user.id, 10)
        assert service.award(user.id, 5) == 15

    def test_award_zero_creates_balance(self, user):
        assert RewardService().award(user.id, 0) == 0
        assert RewardBalance.objects.filter(user=user).exists()

    def test_purchase_deducts_coins(self, user):
        item = RewardItem.objects.create(name="Coffee", cost=30, icon="coffee")
        service = RewardService()
        service.award(user.id, 40)

        purchase = service.purchase(user.id, item.id)

        assert purchase.reward_item == item
        assert service.get_balance(user.id) == 10

    def test_purchase_with_too_few_coins(self, user):
        item = RewardItem.objects.create(name="Day off", cost=500, icon="sun")
        RewardService().award(user.id, 20)

        with pytest.raises(InsufficientCoinsError) as exc:
            RewardService().purchase(user.id, item.id)

        assert exc.value.details == {'balance': 20, 'cost': 500}
        assert RewardService().get_balance(user.id) == 20
        assert not PurchasedReward.objects.exists()

    def test_purchase_missing_item(self, user):
        with pytest.raises(NotFoundError):
            RewardService().purchase(user.id, 999)

    def test_reward_endpoints(self, api_client, user):
        call_command('seed_reward_items')
        items = api_client.get('/api/rewards/items/').json()['items']
        cheapest = items[0]
        RewardService().award(user.id, cheapest['cost'])

        bought = api_client.post(f"/api/rewards/purchase/{cheapest['id']}/")
        assert bought.status_code == 201
        assert bought.json()['coins'] == 0

        assert api_client.get('/api/rewards/').json() == {'coins': 0}
        purchases = api_client.get('/api/rewards/purchased/').json()['purchases']
        assert [p['item']['id'] for p in purchases] == [cheapest['id']]

        again = api_client.post(f"/api/rewards/purchase/{cheapest['id']}/")
        assert again.status_code == 400
        assert again.json()['error'] == 'Not enough coins'

    def test_seed_command_is_idempotent(self):
        call_command('seed_reward_items')
        count = RewardItem.objects.count()

        call_command('seed_reward_items')

        assert RewardItem.objects.count() == count > 0
