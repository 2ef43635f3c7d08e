"""User repository for persistence and authentication lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from showcase.models.user import Role, User
from showcase.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Never issues tokens or touches cookies; DB-level user management only.
    """

    model = User

    def _sortable_fields(self):
        return {
            "id": User.id,
            "email": User.email,
            "username": User.username,
            "created_at": User.created_at,
        }

    def _filterable_fields(self):
        return {
            "email": User.email,
            "username": User.username,
            "role": User.role,
        }

    def _updatable_fields(self):
        """Profile fields a user may edit (password and role excluded)."""
        return {
            "email",
            "first_name",
            "last_name",
            "profile_image",
            "bio",
            "website",
            "github",
            "twitter",
        }

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_username(self, username: str) -> User | None:
        stmt = select(User).where(User.username == username.strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when another user already owns ``email``.

        :param email: Email address to normalise and search.
        :param exclude_id: User id ignored by the check (the caller itself).
        """
        stmt = select(User.id).where(User.email == email.lower().strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return bool(self.session.execute(stmt).first())

    def exists_by_username(self, username: str, *, exclude_id: int | None = None) -> bool:
        stmt = select(User.id).where(User.username == username.strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return bool(self.session.execute(stmt).first())

    # ---------------------------- Credentials ----------------------------

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user when ``email``/``password`` match, else ``None``.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user

    def update_password(self, user: User, new_password: str) -> None:
        """Assign a new password (hashed by the model setter) and flush."""
        user.password = new_password
        self.flush()

    def set_role(self, user: User, role: Role) -> None:
        user.role = role
        self.flush()
