"""Report intake endpoints.

Moderation (admin list, read, status change, delete) is served here at the
report URLs as well as under ``/admin/reports``; both mounts share the same
ADMIN-guarded views.
"""

from __future__ import annotations

from flask import Blueprint

from showcase.api.deps import json_body, json_response, require_auth, service_context, timing
from showcase.api.endpoints.admin import (
    delete_report,
    get_report,
    list_reports,
    update_report_status,
)
from showcase.schemas import ReportCreateSchema, ReportSchema
from showcase.services.reports.dto import ReportCreateIn
from showcase.services.reports.service import ReportService

bp = Blueprint("reports", __name__)

report_schema = ReportSchema()
report_list_schema = ReportSchema(many=True)
report_create_schema = ReportCreateSchema()


@bp.post("/reports")
@timing
def create_report():
    """File a report; anonymous callers are accepted."""

    data = report_create_schema.load(json_body())
    report = ReportService(ctx=service_context()).create_report(ReportCreateIn(**data))
    return json_response({"data": report_schema.dump(report)}, status=201)


@bp.get("/user/reports")
@require_auth
@timing
def my_reports():
    reports = ReportService(ctx=service_context()).list_mine()
    return json_response({"data": report_list_schema.dump(reports)})


bp.add_url_rule("/reports", view_func=list_reports, methods=["GET"])
bp.add_url_rule("/reports/<int:report_id>", view_func=get_report, methods=["GET"])
bp.add_url_rule("/reports/<int:report_id>", view_func=update_report_status, methods=["PATCH"])
bp.add_url_rule("/reports/<int:report_id>", view_func=delete_report, methods=["DELETE"])
