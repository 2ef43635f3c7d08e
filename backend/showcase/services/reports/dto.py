"""DTOs for ReportService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from showcase.models.report import Report
from showcase.services.projects.dto import UserSummaryOut, to_user_summary


@dataclass(frozen=True, slots=True)
class ReportCreateIn:
    """
    Input DTO for flagging a project.

    :param project_id: Reported project.
    :param reason: ``SPAM`` / ``INAPPROPRIATE`` / ``COPYRIGHT`` / ``OTHER``.
    :param details: Optional free text.
    """

    project_id: int | None
    reason: str | None
    details: str | None = None


@dataclass(frozen=True, slots=True)
class ReportFilterIn:
    status: str | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class ReportOut:
    id: int
    project_id: int
    project_title: str | None
    owner_id: int
    reporter: UserSummaryOut | None
    reason: str
    details: str | None
    status: str
    created_at: datetime | None
    updated_at: datetime | None


def to_report_out(report: Report) -> ReportOut:
    return ReportOut(
        id=report.id,
        project_id=report.project_id,
        project_title=report.project.title if report.project else None,
        owner_id=report.owner_id,
        reporter=to_user_summary(report.reporter),
        reason=report.reason.value,
        details=report.details,
        status=report.status.value,
        created_at=report.created_at,
        updated_at=report.updated_at,
    )
