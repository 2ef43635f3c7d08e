"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from showcase.models.comment import Comment
from showcase.services.projects.dto import UserSummaryOut, to_user_summary


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    project_id: int
    user_id: int
    content: str
    author: UserSummaryOut | None
    created_at: datetime | None


@dataclass(frozen=True, slots=True)
class CommentFilterIn:
    """
    Admin listing filters.

    :param user_id: Restrict to one author.
    :param project_id: Restrict to one project.
    :param sort_by: ``created_at`` (default) or ``updated_at``.
    :param sort_order: ``asc`` or ``desc`` (default).
    """

    user_id: int | None = None
    project_id: int | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"


def to_comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        project_id=comment.project_id,
        user_id=comment.user_id,
        content=comment.content,
        author=to_user_summary(comment.author),
        created_at=comment.created_at,
    )
