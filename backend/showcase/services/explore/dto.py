"""DTOs for ExploreService (public, unauthenticated reads)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from showcase.services.projects.dto import ProjectOut


@dataclass(frozen=True, slots=True)
class PublicProjectQueryIn:
    """
    Public listing query.

    :param page: 1-based page number.
    :param limit: Page size.
    :param tag: Only projects carrying this tag.
    :param search: Case-insensitive match on title or description.
    """

    page: int = 1
    limit: int = 12
    tag: str | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class PublicProfileOut:
    """Public profile page: no email, public projects only."""

    id: int
    username: str
    first_name: str | None
    last_name: str | None
    profile_image: str | None
    bio: str | None
    website: str | None
    github: str | None
    twitter: str | None
    created_at: datetime | None
    projects: list[ProjectOut]
    project_count: int
    latest_project: ProjectOut | None
    top_tags: list[str]
