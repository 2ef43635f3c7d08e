# showcase/services/_shared/base.py
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from showcase.core import errors as api_errors
from showcase.repositories.base import Pagination
from showcase.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    RateLimitedError,
    ServiceError,
)
from showcase.services._shared.policies.common import can_access, is_owner
from showcase.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


@dataclass(slots=True)
class ServiceContext:
    """
    Carry request-scoped data (actor, role, request id).

    :param actor_id: Authenticated user identifier.
    :param role: Role claim of the authenticated user (``USER``/``ADMIN``).
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    role: str | None = None
    request_id: str | None = None


def translate_service_error(exc: Exception) -> Exception:
    """
    Map domain/service-level errors to API-level (HTTP) errors.

    :param exc: Exception raised within the service.
    :type exc: Exception
    :returns: Translated exception ready to be re-raised.
    :rtype: Exception
    """
    if isinstance(exc, NotFoundError):
        return api_errors.NotFound(str(exc))

    if isinstance(exc, ConflictError):
        return api_errors.Conflict(exc.detail)

    if isinstance(exc, AuthenticationError):
        return api_errors.Unauthorized(str(exc))

    if isinstance(exc, AuthorizationError):
        return api_errors.Forbidden(str(exc))

    if isinstance(exc, RateLimitedError):
        return api_errors.TooManyRequests(str(exc))

    if isinstance(exc, PreconditionFailedError):
        return api_errors.APIError(
            message=str(exc),
            status_code=412,
            code="precondition_failed",
        )

    # Any other ServiceError subclass → 400 Bad Request
    if isinstance(exc, ServiceError):
        return api_errors.APIError(
            message=str(exc),
            status_code=400,
            code="bad_request",
        )

    return exc


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation and authorization checks.
    * Offer shared validation helpers (pagination/sorting).

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Ownership is always checked inside the same Unit of Work as the
      mutation it guards.
    """

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (actor, role, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :type page: int
        :param limit: Page size, capped at ``MAX_PAGE_SIZE``.
        :type limit: int
        :param sort: Sort tokens like ["-created_at", "title"].
        :type sort: Iterable[str] | None
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = min(max(1, int(limit)), MAX_PAGE_SIZE)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def require_actor(self) -> int:
        """
        Return the authenticated actor id.

        :raises AuthenticationError: If the context carries no actor.
        """
        if self.ctx.actor_id is None:
            raise AuthenticationError("Authentication required")
        return int(self.ctx.actor_id)

    # -------------------------- Error handling ------------------------------

    def translate_exceptions(self, exc: Exception) -> Exception:
        """Delegate to :func:`translate_service_error`."""
        return translate_service_error(exc)

    # --------------------------- AuthZ --------------------------------

    def ensure_owner(self, owner_id: int, *, msg: str | None = None) -> None:
        """
        Ensure the current actor is the resource owner. Admin role grants
        nothing here.

        :param owner_id: Expected owner user id.
        :type owner_id: int
        :param msg: Optional custom error message.
        :type msg: str | None
        :raises AuthorizationError: If actor is not the owner.
        """
        if not is_owner(actor_id=self.ctx.actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You can only access your own resources.")

    def ensure_can_access(
        self,
        owner_id: int,
        *,
        resource: str,
        resource_id: Any,
        action: str,
        msg: str | None = None,
    ) -> None:
        """
        Allow the owner, or an admin through the audited override.

        :param owner_id: Owner user id of the target resource.
        :param resource: Resource kind used in the audit record (e.g. ``project``).
        :param resource_id: Identifier of the target resource.
        :param action: Mutation being attempted (``update``/``delete``/...).
        :param msg: Optional custom error message.
        :raises AuthorizationError: If the actor is neither owner nor admin.
        """
        actor_id = self.ctx.actor_id
        if is_owner(actor_id=actor_id, owner_id=owner_id):
            return
        if not can_access(actor_id=actor_id, role=self.ctx.role, owner_id=owner_id):
            raise AuthorizationError(msg or "You do not have access to this resource")
        log.info(
            "authz.admin_override",
            extra={
                "actor_id": actor_id,
                "owner_id": owner_id,
                "resource": resource,
                "resource_id": resource_id,
                "action": action,
            },
        )
