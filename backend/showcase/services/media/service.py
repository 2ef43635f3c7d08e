"""Project gallery management."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from showcase.models.media import Media
from showcase.models.project import Project
from showcase.services._shared.base import BaseService, ServiceContext
from showcase.services._shared.errors import NotFoundError, ServiceError
from showcase.services._shared.ports.blob_storage import BlobStorage
from showcase.services.media.dto import MediaAttachIn
from showcase.services.projects.dto import MediaOut, to_media_out
from showcase.services.projects.service import purge_blobs

log = logging.getLogger(__name__)

DEFAULT_MAX_MEDIA_PER_PROJECT = 10


class MediaService(BaseService):
    """
    Gallery operations on a project; restricted to the owner or an admin.

    :param blob_storage: Adapter used to delete assets from the media host.
    :param max_per_project: Gallery size cap.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        blob_storage: BlobStorage | None = None,
        max_per_project: int = DEFAULT_MAX_MEDIA_PER_PROJECT,
    ) -> None:
        super().__init__(ctx=ctx)
        self.blob_storage = blob_storage
        self.max_per_project = max_per_project

    def _load_project(self, uow, project_id: int, *, action: str) -> Project:
        project = uow.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        self.ensure_can_access(
            project.user_id, resource="project", resource_id=project_id, action=action
        )
        return project

    def list_media(self, project_id: int) -> list[MediaOut]:
        """Gallery of a project, newest first."""
        self.require_actor()
        with self.ro_uow() as uow:
            self._load_project(uow, project_id, action="list_media")
            return [to_media_out(m) for m in uow.media.list_for_project(project_id)]

    def attach_media(self, project_id: int, dto: MediaAttachIn) -> MediaOut:
        """
        Attach an uploaded asset to a project.

        :raises NotFoundError: If the project does not exist.
        :raises AuthorizationError: If the caller may not modify it.
        :raises ServiceError: If required fields are missing or the gallery
            is full.
        """
        return self.attach_many(project_id, [dto])[0]

    def attach_many(self, project_id: int, items: Sequence[MediaAttachIn]) -> list[MediaOut]:
        """
        Attach several uploaded assets at once; all or none are stored.

        :raises NotFoundError: If the project does not exist.
        :raises AuthorizationError: If the caller may not modify it.
        :raises ServiceError: If ``items`` is empty, an item lacks its URL or
            public id, or the gallery would exceed its cap.
        """
        user_id = self.require_actor()
        if not items:
            raise ServiceError("At least one media item is required")
        if any(not item.url or not item.public_id for item in items):
            raise ServiceError("URL and publicId are required")

        with self.rw_uow() as uow:
            project = self._load_project(uow, project_id, action="attach_media")
            current = uow.media.count_for_project(project_id)
            if current + len(items) > self.max_per_project:
                raise ServiceError(
                    f"A project can have at most {self.max_per_project} media items"
                )
            created = []
            for item in items:
                media = Media(
                    project_id=project.id,
                    user_id=user_id,
                    url=item.url,
                    public_id=item.public_id,
                    alt_text=item.alt_text,
                    media_type=item.media_type or "image",
                )
                uow.media.add(media)
                created.append(media)
            return [to_media_out(m) for m in created]

    def delete_media(self, project_id: int, media_id: int) -> None:
        """
        Remove one asset from a project gallery.

        Checks run in order: media exists (404), belongs to ``project_id``
        (400), caller may modify the project (403). The asset is dropped from
        the media host only once the row deletion is committed; a failure
        there is logged and ignored.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            media = uow.media.get(media_id)
            if media is None:
                raise NotFoundError("Media", media_id)
            if media.project_id != project_id:
                raise ServiceError("Media does not belong to this project")
            project = uow.projects.get(project_id)
            if project is None:
                raise NotFoundError("Project", project_id)
            self.ensure_can_access(
                project.user_id, resource="media", resource_id=media_id, action="delete"
            )
            public_id = media.public_id
            uow.media.delete(media)

        if public_id:
            purge_blobs(self.blob_storage, [public_id])
