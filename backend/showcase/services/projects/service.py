"""
ProjectService
==============

Owner-scoped project lifecycle. Every mutation loads the project, checks
that it exists (404), then checks access (403) and only then writes, all in
the same Unit of Work. Admins pass the access check through an audited
override, so the admin endpoints reuse these methods unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from showcase.models.project import Project, ProjectStatus
from showcase.repositories.project import ProjectRepository
from showcase.services._shared.base import BaseService, ServiceContext
from showcase.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
)
from showcase.services._shared.policies.common import can_access
from showcase.services._shared.ports.blob_storage import BlobStorage
from showcase.services.projects.dto import (
    ProjectCreateIn,
    ProjectOut,
    ProjectUpdateIn,
    to_project_out,
)

log = logging.getLogger(__name__)


def parse_status(raw: str | None) -> ProjectStatus | None:
    """
    Map a public status string to :class:`ProjectStatus`.

    :raises ServiceError: If ``raw`` is not a known status.
    """
    if raw is None:
        return None
    try:
        return ProjectStatus(raw.upper())
    except ValueError as exc:
        raise ServiceError(f"Unknown project status: {raw!r}") from exc


def purge_blobs(storage: BlobStorage | None, public_ids: list[str]) -> None:
    """Delete stored assets; failures are logged and skipped."""
    if storage is None:
        return
    for public_id in public_ids:
        try:
            storage.delete(public_id)
        except Exception:
            log.warning(
                "storage.delete_failed",
                exc_info=True,
                extra={"resource": "media", "resource_id": public_id},
            )


class ProjectService(BaseService):
    """
    Application service for the ``Project`` aggregate.

    :param blob_storage: Storage adapter used to drop media assets when a
        project is deleted.
    """

    def __init__(
        self, *, ctx: ServiceContext | None = None, blob_storage: BlobStorage | None = None
    ) -> None:
        super().__init__(ctx=ctx)
        self.blob_storage = blob_storage

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _load(self, repo: ProjectRepository, project_id: int) -> Project:
        project = repo.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    def can_view(self, project: Project) -> bool:
        """Public projects for everyone; private ones for owner or admin."""
        if project.is_public:
            return True
        return can_access(actor_id=self.ctx.actor_id, role=self.ctx.role, owner_id=project.user_id)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def list_mine(self) -> list[ProjectOut]:
        """Return the caller's projects, newest first."""
        user_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_project_out(p) for p in uow.projects.list_for_owner(user_id)]

    def get_project(self, project_id: int) -> ProjectOut:
        """
        Return one project honoring visibility.

        :raises NotFoundError: If the project does not exist.
        :raises AuthorizationError: If it is private and the caller is
            neither owner nor admin.
        """
        with self.ro_uow() as uow:
            project = self._load(uow.projects, project_id)
            if not self.can_view(project):
                raise AuthorizationError("This project is private")
            return to_project_out(project)

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #

    def create_project(self, dto: ProjectCreateIn) -> ProjectOut:
        """
        Create a project owned by the caller.

        :raises ConflictError: If the caller already has a project with
            this title.
        :raises ServiceError: If a field fails validation.
        """
        user_id = self.require_actor()
        status = parse_status(dto.status) or ProjectStatus.DEVELOPMENT

        with self.rw_uow() as uow:
            repo: ProjectRepository = uow.projects
            if repo.exists_title_for_owner(user_id, dto.title or ""):
                raise ConflictError("Project", "You already have a project with this title")
            try:
                project = Project(
                    user_id=user_id,
                    title=dto.title,
                    description=dto.description,
                    github_url=dto.github_url,
                    demo_url=dto.demo_url,
                    is_public=dto.is_public,
                    status=status,
                )
                repo.add(project)
                repo.replace_tags(project, dto.tags or ())
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            return to_project_out(project)

    def update_project(self, project_id: int, dto: ProjectUpdateIn) -> ProjectOut:
        """
        Update a project (404 → access → mutate).

        :raises NotFoundError: If the project does not exist.
        :raises AuthorizationError: If the caller may not modify it.
        :raises ConflictError: If the new title collides with another
            project of the same owner.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            repo: ProjectRepository = uow.projects
            project = self._load(repo, project_id)
            self.ensure_can_access(
                project.user_id, resource="project", resource_id=project_id, action="update"
            )

            updates: dict[str, Any] = {
                k: v
                for k, v in {
                    "title": dto.title,
                    "description": dto.description,
                    "github_url": dto.github_url,
                    "demo_url": dto.demo_url,
                    "is_public": dto.is_public,
                    "status": parse_status(dto.status),
                }.items()
                if v is not None
            }
            if "title" in updates and repo.exists_title_for_owner(
                project.user_id, updates["title"], exclude_id=project.id
            ):
                raise ConflictError("Project", "You already have a project with this title")

            try:
                repo.update(project, **updates)
                if dto.tags is not None:
                    repo.replace_tags(project, dto.tags)
            except ValueError as exc:
                raise ServiceError(str(exc)) from exc
            return to_project_out(project)

    def delete_project(self, project_id: int) -> None:
        """
        Delete a project with its media, tags, comments and reports.

        :raises NotFoundError: If the project does not exist.
        :raises AuthorizationError: If the caller may not delete it.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            repo: ProjectRepository = uow.projects
            project = self._load(repo, project_id)
            self.ensure_can_access(
                project.user_id, resource="project", resource_id=project_id, action="delete"
            )
            public_ids = [m.public_id for m in project.media if m.public_id]
            repo.delete(project)

        purge_blobs(self.blob_storage, public_ids)
        log.info(
            "project.deleted",
            extra={"actor_id": self.ctx.actor_id, "resource": "project", "resource_id": project_id},
        )
