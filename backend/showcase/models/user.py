"""User account model for the showcase platform."""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import DateTime, Index, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from showcase.core.extensions import db
from showcase.core.passwords import hash_password, verify_password

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .notification import Notification
    from .project import Project

USERNAME_PATTERN = re.compile(r"^[a-z0-9_-]{3,16}$")


class Role(str, Enum):
    """Account role. ``ADMIN`` unlocks the moderation surface."""

    USER = "USER"
    ADMIN = "ADMIN"


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account holder and project owner.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed).
    password_hash : str
        Hashed password (write-only setter via ``password``).
    username : str | None
        Public handle used by profile URLs. Optional until chosen; may be
        changed at most once a year (``username_last_changed``).
    first_name, last_name : str | None
        Optional display names.
    profile_image, bio, website, github, twitter : str | None
        Public profile decorations.
    role : Role
        ``USER`` by default; ``ADMIN`` grants moderation rights.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    username: Mapped[str | None] = mapped_column(String(16), nullable=True)
    first_name: Mapped[str | None] = mapped_column(String(100))
    last_name: Mapped[str | None] = mapped_column(String(100))
    profile_image: Mapped[str | None] = mapped_column(String(500))
    bio: Mapped[str | None] = mapped_column(Text)
    website: Mapped[str | None] = mapped_column(String(500))
    github: Mapped[str | None] = mapped_column(String(100))
    twitter: Mapped[str | None] = mapped_column(String(100))
    role: Mapped[Role] = mapped_column(
        SAEnum(Role, name="user_role", native_enum=True, create_constraint=True),
        nullable=False,
        default=Role.USER,
    )
    username_last_changed: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
        Index("ix_users_role", "role"),
    )

    # Relationships
    projects: Mapped[list[Project]] = relationship(
        "Project",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    notifications: Mapped[list[Notification]] = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        :raises ValueError: If ``raw`` is empty.
        """
        self.password_hash = hash_password(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        return verify_password(raw, self.password_hash)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("username")
    def _validate_username(self, key: str, value: str | None) -> str | None:
        """
        Enforce the public handle format (``^[a-z0-9_-]{3,16}$``).

        :raises ValueError: If the username does not match the pattern.
        """
        if value is None:
            return None
        v = value.strip()
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username must be 3-16 characters of lowercase letters, digits, '-' or '_'."
            )
        return v
