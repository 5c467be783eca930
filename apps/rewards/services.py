# apps/rewards/services.py
import logging
from django.db import transaction
from django.db.models import F
from apps.core.exceptions import InsufficientCoinsError, NotFoundError, ValidationError
from .models import PurchasedReward, RewardBalance, RewardItem

logger = logging.getLogger(__name__)


class RewardService:

    def get_balance(self, user_id: int) -> int:
        balance, _ = RewardBalance.objects.get_or_create(user_id=user_id)
        return balance.coins

    def award(self, user_id: int, coins: int) -> int:
        """Dodaje monety i zwraca nowy stan konta."""
        if coins < 0:
            raise ValidationError("Cannot award a negative amount of coins")
        if coins == 0:
            return self.get_balance(user_id)

        with transaction.atomic():
            RewardBalance.objects.get_or_create(user_id=user_id)
            # F() - inkrementacja po stronie bazy, bez wyścigu read-modify-write
            RewardBalance.objects.filter(user_id=user_id).update(coins=F('coins') + coins)

        logger.info("User %s earned %s coin(s)", user_id, coins)
        return self.get_balance(user_id)

    def purchase(self, user_id: int, item_id: int) -> PurchasedReward:
        try:
            item = RewardItem.objects.get(id=item_id)
        except RewardItem.DoesNotExist:
            raise NotFoundError("Reward item not found")

        with transaction.atomic():
            RewardBalance.objects.get_or_create(user_id=user_id)
            balance = RewardBalance.objects.select_for_update().get(user_id=user_id)

            if balance.coins < item.cost:
                raise InsufficientCoinsError(
                    "Not enough coins",
                    details={'balance': balance.coins, 'cost': item.cost}
                )

            RewardBalance.objects.filter(pk=balance.pk).update(coins=F('coins') - item.cost)
            purchase = PurchasedReward.objects.create(user_id=user_id, reward_item=item)

        logger.info("User %s bought '%s' for %s coin(s)", user_id, item.name, item.cost)
        return purchase
