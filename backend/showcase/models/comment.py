"""Comments left on projects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from showcase.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .project import Project
    from .user import User


class Comment(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Free-text comment authored by ``user_id`` on ``project_id``."""

    __tablename__ = "comments"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (Index("ix_comments_project_created", "project_id", "created_at"),)

    project: Mapped[Project] = relationship("Project", back_populates="comments")
    author: Mapped[User] = relationship("User", lazy="joined")

    @validates("content")
    def _validate_content(self, key: str, value: str) -> str:
        v = (value or "").strip()
        if not v:
            raise ValueError("Comment content is required.")
        return v
