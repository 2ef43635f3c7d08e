"""
ReportService
=============

Project reports filed by visitors and their moderation workflow.

Status transitions are free among PENDING, REVIEWED, IGNORED and RESOLVED.
Moving a report to a different non-PENDING status notifies the reporter.
"""

from __future__ import annotations

import logging

from showcase.models.notification import NotificationType
from showcase.models.report import Report, ReportReason, ReportStatus
from showcase.repositories.base import Page
from showcase.services._shared.base import BaseService
from showcase.services._shared.dto import PaginationIn
from showcase.services._shared.errors import ConflictError, NotFoundError, ServiceError
from showcase.services.notifications.service import notify
from showcase.services.reports.dto import (
    ReportCreateIn,
    ReportFilterIn,
    ReportOut,
    to_report_out,
)

log = logging.getLogger(__name__)

REPORTS_LINK = "/account/reports"

STATUS_MESSAGES = {
    ReportStatus.REVIEWED: "your report has been reviewed. Our team is working on it.",
    ReportStatus.IGNORED: "your report has been reviewed but no violation was found.",
    ReportStatus.RESOLVED: "your report has been reviewed and the necessary action was taken.",
}


def parse_reason(raw: str | None) -> ReportReason:
    try:
        return ReportReason((raw or "").upper())
    except ValueError as exc:
        raise ServiceError(f"Unknown report reason: {raw!r}") from exc


def parse_report_status(raw: str | None) -> ReportStatus:
    try:
        return ReportStatus((raw or "").upper())
    except ValueError as exc:
        raise ServiceError("Invalid status value") from exc


def status_message(project_title: str | None, status: ReportStatus) -> str:
    """Reporter-facing text announcing ``status`` for a project."""
    body = STATUS_MESSAGES.get(status, "the status of your report was updated.")
    return f"{project_title or 'A project'}: {body}"


class ReportService(BaseService):
    """Report intake (anonymous or signed-in) and moderation."""

    # ------------------------------------------------------------------ #
    # Intake
    # ------------------------------------------------------------------ #

    def create_report(self, dto: ReportCreateIn) -> ReportOut:
        """
        File a report against a project.

        Anonymous reports are accepted; signed-in reporters may hold only one
        open (PENDING/REVIEWED) report per project.

        :raises ServiceError: If ``project_id`` or ``reason`` is missing.
        :raises NotFoundError: If the project does not exist.
        :raises ConflictError: If the reporter already has an open report.
        """
        if not dto.project_id or not dto.reason:
            raise ServiceError("Missing required fields")
        reason = parse_reason(dto.reason)
        reporter_id = self.ctx.actor_id

        with self.rw_uow() as uow:
            project = uow.projects.get(dto.project_id)
            if project is None:
                raise NotFoundError("Project", dto.project_id)
            if reporter_id is not None and uow.reports.has_open_report(
                project_id=project.id, reporter_id=reporter_id
            ):
                raise ConflictError("Report", "You have already reported this project")

            report = Report(
                project_id=project.id,
                reporter_id=reporter_id,
                owner_id=project.user_id,
                reason=reason,
                details=(dto.details or None),
                status=ReportStatus.PENDING,
            )
            uow.reports.add(report)
            return to_report_out(report)

    def list_mine(self) -> list[ReportOut]:
        user_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_report_out(r) for r in uow.reports.list_for_reporter(user_id)]

    # ------------------------------------------------------------------ #
    # Moderation
    # ------------------------------------------------------------------ #

    def list_reports(self, filters: ReportFilterIn, pagination: PaginationIn) -> Page[ReportOut]:
        """Paginated listing, newest first, filtered by status and reason."""
        page = self.ensure_pagination(
            page=pagination.page, limit=pagination.limit, sort=["-created_at"]
        )
        criteria = {
            "status": parse_report_status(filters.status) if filters.status else None,
            "reason": parse_reason(filters.reason) if filters.reason else None,
        }
        with self.ro_uow() as uow:
            result = uow.reports.paginate(page, filters=criteria)
            return Page(
                items=[to_report_out(r) for r in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )

    def get_report(self, report_id: int) -> ReportOut:
        with self.ro_uow() as uow:
            report = uow.reports.get(report_id)
            if report is None:
                raise NotFoundError("Report", report_id)
            return to_report_out(report)

    def update_status(self, report_id: int, status: str) -> ReportOut:
        """
        Move a report to ``status`` and notify the reporter when it changed
        to a non-PENDING value.

        :raises ServiceError: If ``status`` is not a known value.
        :raises NotFoundError: If the report does not exist.
        """
        new_status = parse_report_status(status)
        with self.rw_uow() as uow:
            report = uow.reports.get(report_id)
            if report is None:
                raise NotFoundError("Report", report_id)

            changed = report.status != new_status and new_status != ReportStatus.PENDING
            report.status = new_status
            uow.reports.flush()

            if changed and report.reporter_id is not None:
                title = report.project.title if report.project else None
                notify(
                    uow,
                    user_id=report.reporter_id,
                    message=status_message(title, new_status),
                    type=NotificationType.REPORT,
                    link=REPORTS_LINK,
                )
            log.info(
                "report.status_changed",
                extra={
                    "actor_id": self.ctx.actor_id,
                    "resource": "report",
                    "resource_id": report_id,
                    "action": new_status.value,
                },
            )
            return to_report_out(report)

    def delete_report(self, report_id: int) -> None:
        with self.rw_uow() as uow:
            report = uow.reports.get(report_id)
            if report is None:
                raise NotFoundError("Report", report_id)
            uow.reports.delete(report)
