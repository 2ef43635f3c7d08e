"""
Domain-level exceptions used within the service layer.

These exceptions are framework-agnostic: they never depend on Flask or HTTP.
The translation to RFC 7807 responses happens in
:func:`showcase.services._shared.base.translate_service_error`, wired by
``showcase/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    Parameters
    ----------
    exc : IntegrityError
        The exception raised by SQLAlchemy during flush/commit.
    constraint_name : str
        The name of the database constraint to match (e.g. 'uq_users_email').

    Returns
    -------
    bool
        True if the driver message mentions the constraint. SQLite reports
        the column list instead of the name, so callers should keep an
        explicit pre-check as the primary guard.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    return constraint_name.lower() in message


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Anything not covered by a subclass is reported as 400 Bad Request.
    """


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Project").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"{self.entity}: {self.detail}"


class AuthenticationError(ServiceError):
    """Raised when credentials are missing or invalid (401)."""

    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when the actor may not act on a resource (403)."""

    def __init__(self, message: str = "You do not have access to this resource") -> None:
        super().__init__(message)


class RateLimitedError(ServiceError):
    """Raised when an action exceeds its allowed frequency (429)."""

    def __init__(self, message: str = "Too many attempts. Please try again later.") -> None:
        super().__init__(message)


class PreconditionFailedError(ServiceError):
    """Raised when a domain precondition blocks the operation (400)."""
