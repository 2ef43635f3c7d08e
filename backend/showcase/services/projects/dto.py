"""
DTOs for ProjectService and the read models shared by exploration/admin.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from showcase.models.media import Media
from showcase.models.project import Project
from showcase.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ProjectCreateIn:
    """
    Input DTO for creating a project.

    :param title: Title, unique per owner (3+ characters after trimming).
    :param description: Free-form description.
    :param github_url: Repository link.
    :param demo_url: Live demo link.
    :param is_public: Visible in public exploration.
    :param status: ``DEVELOPMENT`` / ``PUBLISHED`` / ``ARCHIVED``.
    :param tags: Tag names (normalized to lowercase, de-duplicated).
    """

    title: str
    description: str | None = None
    github_url: str | None = None
    demo_url: str | None = None
    is_public: bool = True
    status: str | None = None
    tags: Sequence[str] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ProjectUpdateIn:
    """Partial update; ``None`` leaves a field untouched."""

    title: str | None = None
    description: str | None = None
    github_url: str | None = None
    demo_url: str | None = None
    is_public: bool | None = None
    status: str | None = None
    tags: Sequence[str] | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserSummaryOut:
    """Public author card (no email)."""

    id: int
    username: str | None
    first_name: str | None
    last_name: str | None
    profile_image: str | None


@dataclass(frozen=True, slots=True)
class MediaOut:
    id: int
    project_id: int
    url: str
    public_id: str | None
    alt_text: str | None
    media_type: str
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class ProjectOut:
    """Project read model including owner card, tags and gallery."""

    id: int
    user_id: int
    title: str
    description: str | None
    github_url: str | None
    demo_url: str | None
    is_public: bool
    is_featured: bool
    status: str
    tags: list[str]
    owner: UserSummaryOut | None
    media: list[MediaOut]
    created_at: datetime | None
    updated_at: datetime | None


# --------------------------------------------------------------------------- #
# Mappers
# --------------------------------------------------------------------------- #


def to_user_summary(user: User | None) -> UserSummaryOut | None:
    if user is None:
        return None
    return UserSummaryOut(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        profile_image=user.profile_image,
    )


def to_media_out(media: Media) -> MediaOut:
    return MediaOut(
        id=media.id,
        project_id=media.project_id,
        url=media.url,
        public_id=media.public_id,
        alt_text=media.alt_text,
        media_type=media.media_type,
        created_at=media.created_at,
    )


def to_project_out(project: Project) -> ProjectOut:
    return ProjectOut(
        id=project.id,
        user_id=project.user_id,
        title=project.title,
        description=project.description,
        github_url=project.github_url,
        demo_url=project.demo_url,
        is_public=project.is_public,
        is_featured=project.is_featured,
        status=project.status.value,
        tags=project.tag_names,
        owner=to_user_summary(project.owner),
        media=[to_media_out(m) for m in project.media],
        created_at=project.created_at,
        updated_at=project.updated_at,
    )
