from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "DomainError"


class NotFoundError(DomainError):
    """Raised when a referenced employee, operation, station or assignment does not exist."""

    kind = "NotFoundError"


class MissingStationError(DomainError):
    """Raised when an operation has no station, so no requirement can be computed."""

    kind = "MissingStationError"


class ValidationError(DomainError):
    """Raised when input data is invalid or an assignment fails validation.

    Carries every failed check in ``reasons``, never just the first one.
    """

    kind = "ValidationError"

    def __init__(self, message: str, reasons: Iterable[str] | None = None):
        super().__init__(message)
        self.reasons = list(reasons) if reasons is not None else [message]


class ConflictError(DomainError):
    """Raised by storage when a concurrent write defeated the overlap pre-check."""

    kind = "ConflictError"


class ConfigurationError(DomainError):
    """Raised when the staffing ratio or scoring weights are missing or invalid."""

    kind = "ConfigurationError"


class AuthorizationError(DomainError):
    """Raised when the caller lacks permission for an action."""

    kind = "AuthorizationError"


class AuthenticationError(DomainError):
    """Raised when the request carries no resolved caller identity."""

    kind = "AuthenticationError"
