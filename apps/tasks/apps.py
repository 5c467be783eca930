from django.apps import AppConfig


class TasksConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.tasks'
    label = 'tasks'

    def ready(self):
        import apps.tasks.signals  # noqa: F401
