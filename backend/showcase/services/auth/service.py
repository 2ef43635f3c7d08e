# showcase/services/auth/service.py
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from showcase.core.config import SESSION_TTL
from showcase.models.user import User
from showcase.repositories.user import UserRepository
from showcase.services._shared.base import BaseService, ServiceContext
from showcase.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    RateLimitedError,
    ServiceError,
    violates,
)
from showcase.services._shared.ports.token_provider import IdentityClaims, TokenProvider
from showcase.services.auth.dto import (
    AuthUserOut,
    LoginIn,
    PasswordChangeIn,
    RegisterIn,
    SessionOut,
)
from showcase.services.auth.rate_limiter import RateLimitDecision, RateLimiter

log = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_CREDENTIALS = "Invalid email or password"


def claims_for(user: User) -> IdentityClaims:
    """Snapshot the token claims of ``user``."""
    return IdentityClaims(
        subject_id=str(user.id),
        email=user.email,
        role=user.role.value,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
    )


def _to_out(user: User) -> AuthUserOut:
    return AuthUserOut(
        id=user.id,
        email=user.email,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        role=user.role.value,
        created_at=user.created_at,
    )


class AuthService(BaseService):
    """
    Authentication lifecycle service (register / login / change password).

    Tokens are issued through a pluggable :class:`TokenProvider`; the cookie
    itself is the API layer's business. Registration attempts are counted by
    an optional :class:`RateLimiter`.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        rate_limiter: RateLimiter | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param token_provider: Adapter for issuing session tokens.
        :param rate_limiter: Limiter applied to registration attempts.
        :param ctx: Request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.rate_limiter = rate_limiter

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def enforce_register_rate(self, client_key: str | None) -> None:
        """
        Count one registration attempt for ``client_key``.

        :raises RateLimitedError: When the client exceeded its window budget.
        """
        if self.rate_limiter is None:
            return
        if self.rate_limiter.check(client_key) is RateLimitDecision.LIMITED:
            raise RateLimitedError("Too many registration attempts. Please try again later.")

    def register(self, dto: RegisterIn) -> SessionOut:
        """
        Create an account and issue its first session token.

        :raises ConflictError: If the email or username is already taken.
        :raises ServiceError: If a field fails model validation.
        """
        if len(dto.password or "") < MIN_PASSWORD_LENGTH:
            raise ServiceError("Password must be at least 8 characters.")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users

            if repo.exists_by_email(dto.email):
                raise ConflictError("User", "Email is already registered")
            if dto.username and repo.exists_by_username(dto.username):
                raise ConflictError("User", "Username is already taken")

            try:
                user = repo.model(
                    email=dto.email,
                    password=dto.password,
                    username=dto.username or None,
                    first_name=dto.first_name,
                    last_name=dto.last_name,
                )
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc

            try:
                repo.add(user)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise ConflictError("User", "Email is already registered") from exc
                if violates(exc, "uq_users_username"):
                    raise ConflictError("User", "Username is already taken") from exc
                raise

            out = _to_out(user)
            claims = claims_for(user)

        log.info("auth.registered", extra={"user_id": out.id})
        return SessionOut(user=out, token=self.tokens.issue(claims, SESSION_TTL))

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> SessionOut:
        """
        Authenticate credentials and issue a session token.

        Unknown email and wrong password fail with the same message.

        :raises AuthenticationError: If the credentials do not match.
        """
        with self.ro_uow() as uow:
            user = uow.users.authenticate(dto.email, dto.password)
            if user is None:
                log.info("auth.login_failed")
                raise AuthenticationError(INVALID_CREDENTIALS)
            out = _to_out(user)
            claims = claims_for(user)

        return SessionOut(user=out, token=self.tokens.issue(claims, SESSION_TTL))

    # ------------------------------------------------------------------ #
    # Password management
    # ------------------------------------------------------------------ #

    def change_password(self, dto: PasswordChangeIn) -> None:
        """
        Change the actor's password after verifying the current one.

        The caller is expected to end the session afterwards.

        :raises NotFoundError: When the actor no longer exists.
        :raises ServiceError: When the new password is too short or the
            current password does not match.
        """
        user_id = self.require_actor()
        if not dto.current_password or not dto.new_password:
            raise ServiceError("Current and new password are required.")
        if len(dto.new_password) < MIN_PASSWORD_LENGTH:
            raise ServiceError("New password must be at least 8 characters.")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if not user.verify_password(dto.current_password):
                raise ServiceError("Current password is incorrect.")
            repo.update_password(user, dto.new_password)

        log.info("auth.password_changed", extra={"user_id": user_id})
