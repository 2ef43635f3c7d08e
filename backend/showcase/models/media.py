"""Media items (images, videos) attached to projects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from showcase.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .project import Project


class Media(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Reference to a blob hosted by the external storage provider.

    ``public_id`` is the provider-side key used to delete the blob when the
    media row is removed. ``user_id`` mirrors the project owner at creation.
    """

    __tablename__ = "media"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    url: Mapped[str] = mapped_column(String(500), nullable=False)
    public_id: Mapped[str | None] = mapped_column(String(255))
    alt_text: Mapped[str | None] = mapped_column(String(255))
    media_type: Mapped[str] = mapped_column(String(20), nullable=False, default="image")

    __table_args__ = (Index("ix_media_project_id", "project_id"),)

    project: Mapped[Project] = relationship("Project", back_populates="media")
