"""Project showcase models (projects and their tags)."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from showcase.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .media import Media
    from .report import Report
    from .user import User


class ProjectStatus(str, Enum):
    """Lifecycle stage displayed on the project card."""

    DEVELOPMENT = "DEVELOPMENT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class Project(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    Portfolio entry owned by a user.

    Notes
    -----
    - ``user_id`` is the ownership reference; it is set on creation and never
      reassigned.
    - Titles are unique per owner (``uq_projects_user_title``).
    - Private projects (``is_public=False``) are visible to the owner and to
      admins only.
    - ``is_featured`` is toggled by admins and drives the landing page.
    """

    __tablename__ = "projects"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    github_url: Mapped[str | None] = mapped_column(String(500))
    demo_url: Mapped[str | None] = mapped_column(String(500))
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[ProjectStatus] = mapped_column(
        SAEnum(ProjectStatus, name="project_status", native_enum=True, create_constraint=True),
        nullable=False,
        default=ProjectStatus.DEVELOPMENT,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "title", name="uq_projects_user_title"),
        Index("ix_projects_public_featured", "is_public", "is_featured"),
    )

    # Relationships
    owner: Mapped[User] = relationship("User", back_populates="projects", lazy="joined")
    tags: Mapped[list[ProjectTag]] = relationship(
        "ProjectTag",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ProjectTag.name",
    )
    media: Mapped[list[Media]] = relationship(
        "Media",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="Media.id",
    )
    comments: Mapped[list[Comment]] = relationship(
        "Comment",
        back_populates="project",
        cascade="all, delete-orphan",
    )
    reports: Mapped[list[Report]] = relationship(
        "Report",
        back_populates="project",
        cascade="all, delete-orphan",
    )

    @property
    def tag_names(self) -> list[str]:
        return [t.name for t in self.tags]

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        """Trim titles and reject ones shorter than 3 characters."""
        v = (value or "").strip()
        if len(v) < 3:
            raise ValueError("Title must be at least 3 characters.")
        return v


class ProjectTag(PKMixin, ReprMixin, db.Model):
    """Free-form tag attached to a project (lowercased, unique per project)."""

    __tablename__ = "project_tags"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(40), nullable=False)

    __table_args__ = (
        UniqueConstraint("project_id", "name", name="uq_project_tags_project_name"),
        Index("ix_project_tags_name", "name"),
    )

    project: Mapped[Project] = relationship("Project", back_populates="tags")

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        v = (value or "").strip().lower()
        if not v:
            raise ValueError("Tag name is required.")
        return v
