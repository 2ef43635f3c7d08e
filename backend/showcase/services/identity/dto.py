"""
DTOs for IdentityService (the caller's own profile).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Input DTO for editing the caller's profile.

    ``None`` leaves a field untouched; an empty string clears an optional one.
    """

    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    profile_image: str | None = None
    bio: str | None = None
    website: str | None = None
    github: str | None = None
    twitter: str | None = None


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """Private profile view (includes email and role)."""

    id: int
    email: str
    username: str | None
    first_name: str | None
    last_name: str | None
    profile_image: str | None
    bio: str | None
    website: str | None
    github: str | None
    twitter: str | None
    role: str
    username_last_changed: datetime | None
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class UsernameChangeOut:
    """
    Result of a username change request.

    :param username: Username now on record.
    :param changed: ``False`` when the requested name equals the current one.
    """

    username: str
    changed: bool
