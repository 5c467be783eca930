from django.contrib import admin
from .models import DailyQuote, FutureMessage


@admin.register(DailyQuote)
class DailyQuoteAdmin(admin.ModelAdmin):
    list_display = ('goal', 'user', 'day', 'is_read')
    list_filter = ('is_read',)
    search_fields = ('quote', 'goal__title')


@admin.register(FutureMessage)
class FutureMessageAdmin(admin.ModelAdmin):
    list_display = ('user', 'day', 'is_read')
    list_filter = ('is_read',)
