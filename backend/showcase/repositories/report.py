"""Report repository."""

from __future__ import annotations

from sqlalchemy import select

from showcase.models.report import OPEN_REPORT_STATUSES, Report
from showcase.repositories.base import BaseRepository


class ReportRepository(BaseRepository[Report]):
    model = Report

    def _sortable_fields(self):
        return {
            "id": Report.id,
            "created_at": Report.created_at,
            "updated_at": Report.updated_at,
            "status": Report.status,
        }

    def _filterable_fields(self):
        return {
            "status": Report.status,
            "reason": Report.reason,
            "project_id": Report.project_id,
            "reporter_id": Report.reporter_id,
        }

    def has_open_report(self, *, project_id: int, reporter_id: int) -> bool:
        """Return ``True`` when the reporter already has a PENDING/REVIEWED report."""
        stmt = select(Report.id).where(
            Report.project_id == project_id,
            Report.reporter_id == reporter_id,
            Report.status.in_(OPEN_REPORT_STATUSES),
        )
        return bool(self.session.execute(stmt).first())

    def list_for_reporter(self, reporter_id: int) -> list[Report]:
        return self.list(filters={"reporter_id": reporter_id}, sort=["-created_at"])
