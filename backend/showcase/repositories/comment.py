"""Comment repository."""

from __future__ import annotations

from showcase.models.comment import Comment
from showcase.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    def _sortable_fields(self):
        return {
            "id": Comment.id,
            "created_at": Comment.created_at,
            "updated_at": Comment.updated_at,
        }

    def _filterable_fields(self):
        return {"project_id": Comment.project_id, "user_id": Comment.user_id}

    def list_for_project(self, project_id: int) -> list[Comment]:
        return self.list(filters={"project_id": project_id}, sort=["-created_at"])
