from django.apps import AppConfig


class CoachingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.coaching'
    label = 'coaching'
    verbose_name = 'Coaching AI'
