"""Moderation reports filed against projects."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from showcase.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .project import Project
    from .user import User


class ReportReason(str, Enum):
    SPAM = "SPAM"
    INAPPROPRIATE = "INAPPROPRIATE"
    COPYRIGHT = "COPYRIGHT"
    OTHER = "OTHER"


class ReportStatus(str, Enum):
    """Moderation state. ``PENDING`` and ``REVIEWED`` count as open."""

    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    IGNORED = "IGNORED"
    RESOLVED = "RESOLVED"


OPEN_REPORT_STATUSES = (ReportStatus.PENDING, ReportStatus.REVIEWED)


class Report(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """
    A complaint about a project.

    Notes
    -----
    - ``reporter_id`` is ``NULL`` for anonymous reports.
    - ``owner_id`` snapshots the project owner when the report is filed.
    - One reporter may hold at most one open report per project.
    """

    __tablename__ = "reports"

    project_id: Mapped[int] = mapped_column(
        ForeignKey("projects.id", ondelete="CASCADE"), nullable=False
    )
    reporter_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[ReportReason] = mapped_column(
        SAEnum(ReportReason, name="report_reason", native_enum=True, create_constraint=True),
        nullable=False,
    )
    details: Mapped[str | None] = mapped_column(Text)
    status: Mapped[ReportStatus] = mapped_column(
        SAEnum(ReportStatus, name="report_status", native_enum=True, create_constraint=True),
        nullable=False,
        default=ReportStatus.PENDING,
    )

    __table_args__ = (
        Index("ix_reports_status", "status"),
        Index("ix_reports_project_reporter", "project_id", "reporter_id"),
    )

    project: Mapped[Project] = relationship("Project", back_populates="reports", lazy="joined")
    reporter: Mapped[User | None] = relationship("User", foreign_keys=[reporter_id])
