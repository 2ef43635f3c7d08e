"""
DTOs for AuthService.

Input DTOs are built by the API layer from validated payloads; output DTOs
carry the public user view plus the freshly issued session token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for account registration.

    :param email: Login email (normalized by the model).
    :type email: str
    :param password: Raw password (at least 8 characters).
    :type password: str
    :param username: Optional public handle.
    :type username: str | None
    :param first_name: Optional display name.
    :type first_name: str | None
    :param last_name: Optional display name.
    :type last_name: str | None
    """

    email: str
    password: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for authentication.

    :param email: Login email.
    :type email: str
    :param password: Raw password.
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class PasswordChangeIn:
    """
    Input DTO for changing the caller's password.

    :param current_password: Password currently on record.
    :type current_password: str
    :param new_password: Replacement password (at least 8 characters).
    :type new_password: str
    """

    current_password: str
    new_password: str


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthUserOut:
    """Identity view returned after register/login."""

    id: int
    email: str
    username: str | None
    first_name: str | None
    last_name: str | None
    role: str
    created_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Result of a successful register/login.

    :param user: Public identity view.
    :param token: Signed session token to be stored in the cookie.
    """

    user: AuthUserOut
    token: str
