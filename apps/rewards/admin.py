from django.contrib import admin
from .models import PurchasedReward, RewardBalance, RewardItem


@admin.register(RewardItem)
class RewardItemAdmin(admin.ModelAdmin):
    list_display = ('name', 'type', 'cost', 'icon')
    list_filter = ('type',)
    search_fields = ('name',)


@admin.register(RewardBalance)
class RewardBalanceAdmin(admin.ModelAdmin):
    list_display = ('user', 'coins', 'last_updated')


admin.site.register(PurchasedReward)
