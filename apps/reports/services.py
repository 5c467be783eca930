# apps/reports/services.py
from django.contrib.contenttypes.models import ContentType
from .models import ActivityLog


class ActivityLogger:
    @staticmethod
    def log(user, obj, action_type, description="", details=None):
        """Zapisuje zdarzenie dla instancji modelu."""
        return ActivityLogger.log_for(user, type(obj), obj.id, action_type, description, details)

    @staticmethod
    def log_for(user, model, object_id, action_type, description="", details=None):
        """
        Wariant dla obiektów, których instancji już nie mamy (np. po usunięciu).
        """
        if not user or not user.is_authenticated:
            return None  # Nie logujemy działań anonimowych

        return ActivityLog.objects.create(
            user=user,
            content_type=ContentType.objects.get_for_model(model),
            object_id=object_id,
            action_type=action_type,
            description=description,
            details=details or {}
        )
