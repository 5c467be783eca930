# apps/rewards/views.py
from django.http import JsonResponse
from apps.core.http import api_view, isoformat
from .models import PurchasedReward, RewardItem
from .services import RewardService


def item_to_dict(item: RewardItem) -> dict:
    return {
        'id': item.id,
        'name': item.name,
        'description': item.description,
        'cost': item.cost,
        'icon': item.icon,
        'type': item.type,
    }


def purchase_to_dict(purchase: PurchasedReward) -> dict:
    return {
        'id': purchase.id,
        'purchasedAt': isoformat(purchase.purchased_at),
        'item': item_to_dict(purchase.reward_item),
    }


@api_view(["GET"])
def balance_view(request):
    return JsonResponse({'coins': RewardService().get_balance(request.user.id)})


@api_view(["GET"])
def items_view(request):
    items = RewardItem.objects.all()
    return JsonResponse({'items': [item_to_dict(i) for i in items]})


@api_view(["GET"])
def purchased_view(request):
    purchases = PurchasedReward.objects.filter(user=request.user).select_related('reward_item')
    return JsonResponse({'purchases': [purchase_to_dict(p) for p in purchases]})


@api_view(["POST"])
def purchase_view(request, item_id):
    service = RewardService()
    purchase = service.purchase(request.user.id, item_id)
    return JsonResponse({
        'purchase': purchase_to_dict(purchase),
        'coins': service.get_balance(request.user.id),
    }, status=201)
