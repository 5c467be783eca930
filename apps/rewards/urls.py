# apps/rewards/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('rewards/', views.balance_view, name='reward_balance'),
    path('rewards/items/', views.items_view, name='reward_items'),
    path('rewards/purchased/', views.purchased_view, name='reward_purchased'),
    path('rewards/purchase/<int:item_id>/', views.purchase_view, name='reward_purchase'),
]
