"""Project repository with public exploration queries."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, cast

from sqlalchemy import Select, func, or_, select

from showcase.models.project import Project, ProjectStatus, ProjectTag
from showcase.repositories.base import BaseRepository, Page, Pagination


class ProjectRepository(BaseRepository[Project]):
    """Persistence for :class:`Project` and its tags."""

    model = Project

    def _sortable_fields(self):
        return {
            "id": Project.id,
            "title": Project.title,
            "created_at": Project.created_at,
            "updated_at": Project.updated_at,
            "status": Project.status,
        }

    def _filterable_fields(self):
        return {
            "user_id": Project.user_id,
            "is_public": Project.is_public,
            "is_featured": Project.is_featured,
            "status": Project.status,
        }

    def _updatable_fields(self):
        return {"title", "description", "github_url", "demo_url", "is_public", "status"}

    # ---------------------------- Lookups ----------------------------

    def exists_title_for_owner(
        self, user_id: int, title: str, *, exclude_id: int | None = None
    ) -> bool:
        """Return ``True`` when ``user_id`` already has a project called ``title``."""
        stmt = select(Project.id).where(
            Project.user_id == user_id, Project.title == title.strip()
        )
        if exclude_id is not None:
            stmt = stmt.where(Project.id != exclude_id)
        return bool(self.session.execute(stmt).first())

    def list_for_owner(self, user_id: int) -> list[Project]:
        return self.list(filters={"user_id": user_id}, sort=["-created_at"])

    # ---------------------------- Tags ----------------------------

    def replace_tags(self, project: Project, names: Iterable[str]) -> None:
        """Replace the tag set with the de-duplicated, lowercased ``names``."""
        wanted: list[str] = []
        for raw in names:
            name = raw.strip().lower()
            if name and name not in wanted:
                wanted.append(name)
        project.tags[:] = [t for t in project.tags if t.name in wanted]
        present = {t.name for t in project.tags}
        for name in wanted:
            if name not in present:
                project.tags.append(ProjectTag(name=name))
        self.flush()

    def top_tags_for_owner(self, user_id: int, *, public_only: bool, limit: int = 5) -> list[str]:
        """Most used tag names across a user's projects, most frequent first."""
        stmt = (
            select(ProjectTag.name, func.count(ProjectTag.id).label("uses"))
            .join(Project, Project.id == ProjectTag.project_id)
            .where(Project.user_id == user_id)
        )
        if public_only:
            stmt = stmt.where(Project.is_public.is_(True))
        stmt = (
            stmt.group_by(ProjectTag.name)
            .order_by(func.count(ProjectTag.id).desc(), ProjectTag.name.asc())
            .limit(limit)
        )
        return [row.name for row in self.session.execute(stmt)]

    # ---------------------------- Exploration ----------------------------

    def _public_stmt(self, *, tag: str | None, search: str | None) -> Select[Any]:
        stmt = select(Project).where(Project.is_public.is_(True))
        if tag:
            stmt = stmt.where(
                Project.tags.any(ProjectTag.name == tag.strip().lower())
            )
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(Project.title.ilike(pattern), Project.description.ilike(pattern))
            )
        return stmt

    def paginate_public(
        self, pagination: Pagination, *, tag: str | None = None, search: str | None = None
    ) -> Page[Project]:
        """Public projects filtered by tag and free-text search."""
        return self.paginate(pagination, stmt=self._public_stmt(tag=tag, search=search))

    def featured(self, *, limit: int = 3) -> list[Project]:
        """Featured public projects, most recently updated first."""
        stmt = (
            select(Project)
            .where(Project.is_public.is_(True), Project.is_featured.is_(True))
            .order_by(Project.updated_at.desc(), Project.id.desc())
            .limit(limit)
        )
        return cast(list[Project], list(self.session.execute(stmt).unique().scalars()))

    def public_for_owner(self, user_id: int) -> list[Project]:
        return self.list(filters={"user_id": user_id, "is_public": True}, sort=["-created_at"])

    # ---------------------------- Statistics ----------------------------

    def count_created_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(Project).where(Project.created_at >= since)
        return int(self.session.execute(stmt).scalar_one())

    def created_since(self, since: datetime, *, limit: int) -> list[Project]:
        stmt = (
            select(Project)
            .where(Project.created_at >= since)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .limit(limit)
        )
        return cast(list[Project], list(self.session.execute(stmt).unique().scalars()))

    def count_active_public(self) -> int:
        return self.count(is_public=True, status=ProjectStatus.PUBLISHED)

    def count_by_status(self) -> dict[str, int]:
        stmt = select(Project.status, func.count(Project.id)).group_by(Project.status)
        counts = {s.value: 0 for s in ProjectStatus}
        for status, total in self.session.execute(stmt):
            counts[ProjectStatus(status).value] = int(total)
        return counts

    def created_at_since(self, since: datetime) -> list[datetime]:
        """Creation timestamps of projects created at or after ``since``."""
        stmt = select(Project.created_at).where(Project.created_at >= since)
        return list(self.session.execute(stmt).scalars())
