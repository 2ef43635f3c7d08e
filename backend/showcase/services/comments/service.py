"""Comments on projects."""

from __future__ import annotations

import logging

from showcase.models.comment import Comment
from showcase.repositories.base import Page
from showcase.services._shared.base import BaseService
from showcase.services._shared.dto import PaginationIn
from showcase.services._shared.errors import AuthorizationError, NotFoundError, ServiceError
from showcase.services.comments.dto import CommentFilterIn, CommentOut, to_comment_out
from showcase.services.projects.service import ProjectService

log = logging.getLogger(__name__)


class CommentService(BaseService):
    """
    Read and write comments.

    Comments on a private project are visible only to its owner and to
    admins, and only they may post there.
    """

    def _visible_project(self, uow, project_id: int):
        project = uow.projects.get(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        if not ProjectService(ctx=self.ctx).can_view(project):
            raise AuthorizationError("This project is private")
        return project

    def list_for_project(self, project_id: int) -> list[CommentOut]:
        """Comments of a project, newest first."""
        with self.ro_uow() as uow:
            self._visible_project(uow, project_id)
            return [to_comment_out(c) for c in uow.comments.list_for_project(project_id)]

    def add_comment(self, project_id: int, content: str) -> CommentOut:
        """
        Post a comment as the caller.

        :raises ServiceError: If ``content`` is blank.
        """
        user_id = self.require_actor()
        if not content or not content.strip():
            raise ServiceError("Comment content cannot be empty")

        with self.rw_uow() as uow:
            self._visible_project(uow, project_id)
            comment = Comment(project_id=project_id, user_id=user_id, content=content)
            uow.comments.add(comment)
            return to_comment_out(comment)

    # ------------------------------------------------------------------ #
    # Moderation
    # ------------------------------------------------------------------ #

    def list_all(self, filters: CommentFilterIn, pagination: PaginationIn) -> Page[CommentOut]:
        """Paginated comment listing for moderators."""
        field = filters.sort_by if filters.sort_by in ("created_at", "updated_at") else "created_at"
        token = field if filters.sort_order == "asc" else f"-{field}"
        page = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=[token]
        )
        with self.ro_uow() as uow:
            result = uow.comments.paginate(
                page,
                filters={"user_id": filters.user_id, "project_id": filters.project_id},
            )
            return Page(
                items=[to_comment_out(c) for c in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )

    def delete_comment(self, comment_id: int) -> None:
        """
        Delete a comment (author or admin).

        :raises NotFoundError: If the comment does not exist.
        :raises AuthorizationError: If the caller is neither author nor admin.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            self.ensure_can_access(
                comment.user_id, resource="comment", resource_id=comment_id, action="delete"
            )
            uow.comments.delete(comment)
