# apps/core/http.py
import json
import logging
from datetime import date, datetime
from functools import wraps

from django.http import JsonResponse
from django.utils.dateparse import parse_date, parse_datetime
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods

from apps.core.exceptions import DomainError, ValidationError

logger = logging.getLogger(__name__)


def api_view(methods):
    """
    Dekorator dla widoków JSON:
    - wymaga zalogowanego użytkownika (401 zamiast przekierowania na login),
    - ogranicza metody HTTP,
    - mapuje wyjątki domenowe na odpowiedź {"error": ...} z właściwym kodem,
    - ustawia ciasteczko csrftoken, żeby klient SPA mógł wysyłać X-CSRFToken.
    """
    def decorator(view_func):
        @ensure_csrf_cookie
        @require_http_methods(methods)
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return JsonResponse({'error': 'You must be logged in to access this resource'}, status=401)
            try:
                return view_func(request, *args, **kwargs)
            except DomainError as e:
                if e.status_code >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, e.message)
                body = {'error': e.message}
                if e.details:
                    body['details'] = e.details
                return JsonResponse(body, status=e.status_code)
        return wrapper
    return decorator


def parse_json_body(request) -> dict:
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError("Malformed JSON body")
    if not isinstance(data, dict):
        raise ValidationError("JSON body must be an object")
    return data


def parse_optional_date(value, field_name):
    """Przyjmuje 'YYYY-MM-DD' albo pełny ISO datetime (jak wysyła frontend)."""
    if value in (None, ''):
        return None
    if isinstance(value, date):
        return value
    parsed = None
    if isinstance(value, str):
        try:
            parsed = parse_date(value)
            if parsed is None:
                dt = parse_datetime(value.replace('Z', '+00:00'))
                parsed = dt.date() if dt else None
        except ValueError:
            parsed = None
    if parsed is None:
        raise ValidationError(f"Invalid {field_name} format. Use ISO format.")
    return parsed


def parse_optional_int(value, field_name):
    if value in (None, ''):
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def isoformat(value):
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def form_errors(form) -> dict:
    """Błędy formularza Django jako {pole: [komunikaty]}."""
    return {field: [str(e) for e in errors] for field, errors in form.errors.items()}
