# apps/core/exceptions.py
"""Wyjątki domenowe wspólne dla wszystkich aplikacji.

Każdy wyjątek niesie kod HTTP, na który mapuje go warstwa widoków
(patrz apps.core.http.api_view).
"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    status_code = 400


class NotFoundOrUnauthorized(DomainError):
    """Rekord nie istnieje albo nie należy do wywołującego."""
    status_code = 404


class NotFoundError(NotFoundOrUnauthorized):
    status_code = 404


class UnauthorizedError(NotFoundOrUnauthorized):
    status_code = 403


class ConflictError(DomainError):
    status_code = 409


class PersistenceError(DomainError):
    status_code = 500


class UpstreamGenerationError(DomainError):
    """Zewnętrzny model językowy nie odpowiedział albo zwrócił śmieci."""
    status_code = 502


class InsufficientCoinsError(DomainError):
    status_code = 400
