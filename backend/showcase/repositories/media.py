"""Media repository."""

from __future__ import annotations

from showcase.models.media import Media
from showcase.repositories.base import BaseRepository


class MediaRepository(BaseRepository[Media]):
    model = Media

    def _sortable_fields(self):
        return {"id": Media.id, "created_at": Media.created_at}

    def _filterable_fields(self):
        return {"project_id": Media.project_id, "user_id": Media.user_id}

    def list_for_project(self, project_id: int) -> list[Media]:
        return self.list(filters={"project_id": project_id}, sort=["-created_at", "-id"])

    def count_for_project(self, project_id: int) -> int:
        return self.count(project_id=project_id)
