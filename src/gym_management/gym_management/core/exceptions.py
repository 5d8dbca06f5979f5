from __future__ import annotations

from typing import Any, Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation"

    def __init__(self, message: str, field_errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors or {})


class ConflictError(DomainError):
    """Raised when a uniqueness rule is violated (duplicate position, CPF, ...)."""

    kind = "conflict"

    def __init__(self, message: str, *, field: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.field = field
        self.value = value


class NotFoundError(DomainError):
    """Raised when a referenced student/plan/instructor does not exist."""

    kind = "not_found"


class InfrastructureError(DomainError):
    """Raised when the store is unreachable or a query fails."""

    kind = "infrastructure"


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    kind = "authentication"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization"
