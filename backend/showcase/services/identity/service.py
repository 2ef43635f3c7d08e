"""
IdentityService
===============

Service for the caller's own ``User`` record:
- Private profile read and update
- Username changes, limited to one per year

Handlers reload the user here instead of trusting token claims, so profile
data is always current even while an older session token is still valid.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from showcase.models.base import as_utc, utcnow
from showcase.models.user import User
from showcase.repositories.user import UserRepository
from showcase.services._shared.base import BaseService
from showcase.services._shared.errors import (
    ConflictError,
    NotFoundError,
    RateLimitedError,
    ServiceError,
)
from showcase.services.identity.dto import ProfileOut, ProfileUpdateIn, UsernameChangeOut

USERNAME_CHANGE_INTERVAL = timedelta(days=365)

_OPTIONAL_FIELDS = ("first_name", "last_name", "profile_image", "bio", "website", "github", "twitter")


def to_profile_out(user: User) -> ProfileOut:
    return ProfileOut(
        id=user.id,
        email=user.email,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image=user.profile_image,
        bio=user.bio,
        website=user.website,
        github=user.github,
        twitter=user.twitter,
        role=user.role.value,
        username_last_changed=user.username_last_changed,
        created_at=user.created_at,
    )


class IdentityService(BaseService):
    """
    Application service for the authenticated user's own account.

    Responsibilities
    ----------------
    - Read and update profile fields.
    - Enforce username format, uniqueness and the yearly change limit.
    """

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_profile(self) -> ProfileOut:
        """
        Return the caller's profile.

        :raises NotFoundError: If the account no longer exists.
        """
        user_id = self.require_actor()
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return to_profile_out(user)

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def update_profile(self, dto: ProfileUpdateIn) -> ProfileOut:
        """
        Update the caller's profile fields.

        :raises NotFoundError: If the account no longer exists.
        :raises ServiceError: If the email is taken or malformed.
        """
        user_id = self.require_actor()
        updates: dict[str, Any] = {}
        if dto.email is not None:
            updates["email"] = dto.email
        for name in _OPTIONAL_FIELDS:
            value = getattr(dto, name)
            if value is not None:
                updates[name] = value.strip() or None

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            if "email" in updates and repo.exists_by_email(updates["email"], exclude_id=user_id):
                raise ServiceError("Email is already in use.")

            try:
                repo.update(user, **updates)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            return to_profile_out(user)

    # --------------------------------------------------------------------- #
    # Username
    # --------------------------------------------------------------------- #

    def change_username(self, username: str, *, now: datetime | None = None) -> UsernameChangeOut:
        """
        Change the caller's public handle.

        Checks run in order: account exists, yearly limit, unchanged name
        (no-op), uniqueness.

        :raises NotFoundError: If the account no longer exists.
        :raises RateLimitedError: If the username changed within the last year.
        :raises ConflictError: If another account holds ``username``.
        :raises ServiceError: If ``username`` is malformed.
        """
        user_id = self.require_actor()
        now = now or utcnow()
        wanted = (username or "").strip()

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            last = user.username_last_changed
            if last is not None and as_utc(last) > now - USERNAME_CHANGE_INTERVAL:
                raise RateLimitedError("Username can only be changed once per year.")

            if wanted == user.username:
                return UsernameChangeOut(username=wanted, changed=False)

            if repo.exists_by_username(wanted, exclude_id=user_id):
                raise ConflictError("User", "Username is already taken")

            try:
                user.username = wanted
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            user.username_last_changed = now
            repo.flush()
            return UsernameChangeOut(username=user.username, changed=True)
