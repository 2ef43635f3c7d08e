"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import timedelta
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from showcase.core.errors import Forbidden, Unauthorized
from showcase.core.extensions import BLOB_STORAGE_KEY, RATE_LIMIT_STORE_KEY
from showcase.core.logger import ensure_request_id
from showcase.models.user import Role
from showcase.schemas.common import PaginationQuerySchema
from showcase.services._shared.base import ServiceContext
from showcase.services._shared.dto import PaginationIn
from showcase.services._shared.policies.common import is_admin
from showcase.services._shared.ports.blob_storage import BlobStorage
from showcase.services._shared.ports.rate_limit_store import RateLimitStore
from showcase.services._shared.ports.token_provider import IdentityClaims
from showcase.services.auth.rate_limiter import RateLimiter
from showcase.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork

from .session import get_identity_resolver

F = TypeVar("F", bound=Callable[..., Any])

AUTH_REQUIRED = "Authentication required"
ADMIN_REQUIRED = "Admin privileges required"


def parse_pagination(default_limit: int = 20, max_limit: int = 100) -> PaginationIn:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return PaginationIn(page=data["page"], limit=data["limit"], sort=data["sort"])


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def json_body() -> dict[str, Any]:
    """Return the JSON object body, or an empty dict when absent or not an object."""

    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


# --------------------------------------------------------------------------- #
# Identity
# --------------------------------------------------------------------------- #


def with_live_role(identity: IdentityClaims) -> IdentityClaims:
    """Replace an ADMIN role claim with the role currently stored for the user.

    Tokens are not reissued on demotion, so the admin claim is checked
    against the database. A user that no longer exists falls back to ``USER``.
    Non-admin claims are returned unchanged.
    """

    if not is_admin(identity.role):
        return identity
    with SQLAlchemyReadOnlyUnitOfWork() as uow:
        user = uow.users.get(identity.user_id)
        live_role = user.role.value if user is not None else Role.USER.value
    if live_role != identity.role:
        current_app.logger.info(
            "authz.stale_role",
            extra={"actor_id": identity.user_id, "claimed": identity.role, "live": live_role},
        )
        return replace(identity, role=live_role)
    return identity


def current_identity() -> IdentityClaims | None:
    """Identity attached by :func:`require_auth`, else resolved from the request."""

    if "identity" in g:
        return cast(IdentityClaims | None, g.identity)
    identity = get_identity_resolver().resolve(request)
    if identity is not None:
        identity = with_live_role(identity)
    g.identity = identity
    return identity


def service_context(identity: IdentityClaims | None = None) -> ServiceContext:
    """Build the service context for the current caller (anonymous allowed)."""

    identity = identity if identity is not None else current_identity()
    return ServiceContext(
        actor_id=identity.user_id if identity else None,
        role=identity.role if identity else None,
        request_id=ensure_request_id(),
    )


def require_auth(func: F | None = None, *, admin_only: bool = False):
    """Reject the request unless it carries a valid session.

    Usable bare (``@require_auth``) or configured
    (``@require_auth(admin_only=True)``). Steps, in order: resolve the
    identity from the explicit request; no identity → 401; an ADMIN claim
    is checked against the stored role; ``admin_only`` and not ADMIN → 403;
    otherwise expose it as ``g.identity`` and call the handler.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any):
            identity = get_identity_resolver().resolve(request)
            if identity is None:
                raise Unauthorized(AUTH_REQUIRED)
            identity = with_live_role(identity)
            if admin_only and not is_admin(identity.role):
                raise Forbidden(ADMIN_REQUIRED)
            g.identity = identity
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    if func is not None:
        return decorator(func)
    return decorator


def require_admin(func: F) -> F:
    """Shorthand for ``require_auth(admin_only=True)``."""

    return cast(F, require_auth(admin_only=True)(func))


# --------------------------------------------------------------------------- #
# Collaborators published on ``app.extensions``
# --------------------------------------------------------------------------- #


def client_key() -> str:
    """Rate-limit key of the caller: its address (after ProxyFix) or ``unknown``."""

    return request.remote_addr or "unknown"


def get_rate_limiter() -> RateLimiter:
    """Registration limiter over the shared store, configured from app settings."""

    store = cast(RateLimitStore, current_app.extensions[RATE_LIMIT_STORE_KEY])
    return RateLimiter(
        store,
        limit=int(current_app.config.get("REGISTER_RATE_LIMIT", 5)),
        window=timedelta(seconds=int(current_app.config.get("REGISTER_RATE_WINDOW_SECONDS", 300))),
    )


def get_blob_storage() -> BlobStorage:
    return cast(BlobStorage, current_app.extensions[BLOB_STORAGE_KEY])


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
