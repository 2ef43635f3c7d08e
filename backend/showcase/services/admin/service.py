"""
AdminService
============

Moderation and statistics for the admin panel. Callers must already hold
the ADMIN role (enforced by the route guard). Mutations on owned resources
(projects, comments, reports) go through their own services so the
ownership rules live in one place.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from showcase.models.base import as_utc, utcnow
from showcase.models.user import Role
from showcase.repositories.base import Page
from showcase.services._shared.base import BaseService
from showcase.services._shared.dto import PaginationIn
from showcase.services._shared.errors import NotFoundError, ServiceError
from showcase.services.admin.dto import (
    AdminUserOut,
    DashboardOut,
    MonthlyCount,
    ProjectStatsOut,
)
from showcase.services.projects.dto import ProjectOut, to_project_out

log = logging.getLogger(__name__)

RECENT_WINDOW = timedelta(days=7)
RECENT_LIMIT = 10
TREND_MONTHS = 6


def _month_start(moment: datetime, months_back: int) -> datetime:
    """First day (00:00) of the month ``months_back`` months before ``moment``."""
    index = moment.year * 12 + (moment.month - 1) - months_back
    return moment.replace(
        year=index // 12, month=index % 12 + 1, day=1, hour=0, minute=0, second=0, microsecond=0
    )


def monthly_trend(created: list[datetime], *, now: datetime, months: int) -> list[MonthlyCount]:
    """
    Count creations per calendar month, oldest first.

    Every month from ``months`` months ago to the current one is present,
    zero-filled when nothing was created.
    """
    buckets: dict[str, int] = {}
    for back in range(months, -1, -1):
        start = _month_start(now, back)
        buckets[f"{start.year:04d}-{start.month:02d}"] = 0
    for value in created:
        value = as_utc(value)
        key = f"{value.year:04d}-{value.month:02d}"
        if key in buckets:
            buckets[key] += 1
    return [MonthlyCount(month=k, count=v) for k, v in buckets.items()]


def parse_role(raw: str | None) -> Role:
    try:
        return Role((raw or "").upper())
    except ValueError as exc:
        raise ServiceError("Role must be USER or ADMIN") from exc


class AdminService(BaseService):
    """Admin-only user management, project curation and statistics."""

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #

    def list_users(self, pagination: PaginationIn) -> Page[AdminUserOut]:
        page = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=pagination.sort or ["-created_at"]
        )
        with self.ro_uow() as uow:
            result = uow.users.paginate(page)
            items = [
                AdminUserOut(
                    id=u.id,
                    email=u.email,
                    username=u.username,
                    first_name=u.first_name,
                    last_name=u.last_name,
                    role=u.role.value,
                    project_count=uow.projects.count(user_id=u.id),
                    created_at=u.created_at,
                )
                for u in result.items
            ]
            return Page(items=items, total=result.total, page=result.page, limit=result.limit)

    def set_role(self, user_id: int, role: str) -> AdminUserOut:
        """
        Change a user's role.

        A demoted admin loses admin access on their next request; the stored
        role overrides the ADMIN claim in their session token.

        :raises ServiceError: If ``role`` is unknown or an admin demotes
            themselves.
        :raises NotFoundError: If the user does not exist.
        """
        new_role = parse_role(role)
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            if user.id == self.ctx.actor_id and new_role != Role.ADMIN:
                raise ServiceError("You cannot remove your own admin role")
            previous = user.role
            uow.users.set_role(user, new_role)
            log.info(
                "admin.role_changed from %s",
                previous.value,
                extra={
                    "actor_id": self.ctx.actor_id,
                    "user_id": user.id,
                    "action": new_role.value,
                },
            )
            return AdminUserOut(
                id=user.id,
                email=user.email,
                username=user.username,
                first_name=user.first_name,
                last_name=user.last_name,
                role=user.role.value,
                project_count=uow.projects.count(user_id=user.id),
                created_at=user.created_at,
            )

    # ------------------------------------------------------------------ #
    # Projects
    # ------------------------------------------------------------------ #

    def list_projects(self, pagination: PaginationIn) -> Page[ProjectOut]:
        """Every project, private ones included."""
        page = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=pagination.sort or ["-created_at"]
        )
        with self.ro_uow() as uow:
            result = uow.projects.paginate(page)
            return Page(
                items=[to_project_out(p) for p in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )

    def set_featured(self, project_id: int, is_featured: bool) -> ProjectOut:
        """
        Toggle the featured flag.

        :raises NotFoundError: If the project does not exist.
        """
        with self.rw_uow() as uow:
            project = uow.projects.get(project_id)
            if project is None:
                raise NotFoundError("Project", project_id)
            project.is_featured = bool(is_featured)
            uow.projects.flush()
            log.info(
                "admin.project_featured",
                extra={
                    "actor_id": self.ctx.actor_id,
                    "resource": "project",
                    "resource_id": project_id,
                    "action": "feature" if is_featured else "unfeature",
                },
            )
            return to_project_out(project)

    # ------------------------------------------------------------------ #
    # Dashboard
    # ------------------------------------------------------------------ #

    def dashboard(self, *, now: datetime | None = None) -> DashboardOut:
        now = now or utcnow()
        with self.ro_uow() as uow:
            return DashboardOut(
                total_users=uow.users.count(),
                total_projects=uow.projects.count(),
                active_public_projects=uow.projects.count_active_public(),
                recent_projects=uow.projects.count_created_since(now - RECENT_WINDOW),
            )

    def project_stats(self, *, now: datetime | None = None) -> ProjectStatsOut:
        now = now or utcnow()
        since = _month_start(now, TREND_MONTHS)
        with self.ro_uow() as uow:
            total_users = uow.users.count()
            total_projects = uow.projects.count()
            return ProjectStatsOut(
                status_stats=uow.projects.count_by_status(),
                visibility_stats={
                    "public": uow.projects.count(is_public=True),
                    "private": uow.projects.count(is_public=False),
                },
                monthly_trends=monthly_trend(
                    uow.projects.created_at_since(since), now=now, months=TREND_MONTHS
                ),
                total_users=total_users,
                total_projects=total_projects,
                avg_projects_per_user=(total_projects / total_users) if total_users else 0.0,
            )

    def recent_projects(self, *, now: datetime | None = None) -> list[ProjectOut]:
        """Projects created during the last 7 days, newest first (at most 10)."""
        now = now or utcnow()
        with self.ro_uow() as uow:
            return [
                to_project_out(p)
                for p in uow.projects.created_since(now - RECENT_WINDOW, limit=RECENT_LIMIT)
            ]
