"""DTOs for AdminService."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True, slots=True)
class AdminUserOut:
    id: int
    email: str
    username: str | None
    first_name: str | None
    last_name: str | None
    role: str
    project_count: int
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class DashboardOut:
    """
    Headline counters.

    :param recent_projects: Projects created during the last 7 days.
    """

    total_users: int
    total_projects: int
    active_public_projects: int
    recent_projects: int


@dataclass(frozen=True, slots=True)
class MonthlyCount:
    month: str
    count: int


@dataclass(frozen=True, slots=True)
class ProjectStatsOut:
    status_stats: dict[str, int]
    visibility_stats: dict[str, int]
    monthly_trends: list[MonthlyCount] = field(default_factory=list)
    total_users: int = 0
    total_projects: int = 0
    avg_projects_per_user: float = 0.0
