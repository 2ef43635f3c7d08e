"""Moderation and dashboard endpoints. Every route requires the ADMIN role."""

from __future__ import annotations

from flask import Blueprint, request

from showcase.api.deps import (
    get_blob_storage,
    json_body,
    json_response,
    parse_pagination,
    require_auth,
    service_context,
    timing,
)
from showcase.schemas import (
    AdminUserSchema,
    CommentFilterSchema,
    CommentSchema,
    DashboardSchema,
    FeatureProjectSchema,
    ProjectIdQuerySchema,
    ProjectSchema,
    ProjectStatsSchema,
    ReportFilterSchema,
    ReportSchema,
    ReportStatusSchema,
    RoleChangeSchema,
    build_meta,
)
from showcase.services.admin.service import AdminService
from showcase.services.comments.dto import CommentFilterIn
from showcase.services.comments.service import CommentService
from showcase.services.projects.service import ProjectService
from showcase.services.reports.dto import ReportFilterIn
from showcase.services.reports.service import ReportService

bp = Blueprint("admin", __name__, url_prefix="/admin")

report_schema = ReportSchema()
report_list_schema = ReportSchema(many=True)
report_filter_schema = ReportFilterSchema()
report_status_schema = ReportStatusSchema()
admin_user_list_schema = AdminUserSchema(many=True)
admin_user_schema = AdminUserSchema()
role_change_schema = RoleChangeSchema()
project_schema = ProjectSchema()
project_list_schema = ProjectSchema(many=True)
feature_schema = FeatureProjectSchema()
project_id_schema = ProjectIdQuerySchema()
comment_list_schema = CommentSchema(many=True)
comment_filter_schema = CommentFilterSchema()
dashboard_schema = DashboardSchema()
project_stats_schema = ProjectStatsSchema()

# camelCase query values accepted alongside the column names
SORT_FIELDS = {"createdAt": "created_at", "updatedAt": "updated_at"}


def _paged(items, page) -> dict:
    return {
        "data": items,
        "meta": build_meta(total=page.total, page=page.page, limit=page.limit),
    }


# -------------------------------- Reports ----------------------------------


@bp.get("/reports")
@require_auth(admin_only=True)
@timing
def list_reports():
    data = report_filter_schema.load(request.args)
    page = ReportService(ctx=service_context()).list_reports(
        ReportFilterIn(status=data.get("status"), reason=data.get("reason")),
        parse_pagination(),
    )
    return json_response(_paged(report_list_schema.dump(page.items), page))


@bp.get("/reports/<int:report_id>")
@require_auth(admin_only=True)
@timing
def get_report(report_id: int):
    report = ReportService(ctx=service_context()).get_report(report_id)
    return json_response({"data": report_schema.dump(report)})


@bp.patch("/reports/<int:report_id>")
@require_auth(admin_only=True)
@timing
def update_report_status(report_id: int):
    """Move a report through its workflow; the reporter is notified on change."""

    data = report_status_schema.load(json_body())
    report = ReportService(ctx=service_context()).update_status(report_id, data["status"])
    return json_response({"data": report_schema.dump(report)})


@bp.delete("/reports/<int:report_id>")
@require_auth(admin_only=True)
@timing
def delete_report(report_id: int):
    ReportService(ctx=service_context()).delete_report(report_id)
    return json_response({"data": {"message": "Report deleted"}})


# --------------------------------- Users -----------------------------------


@bp.get("/users")
@require_auth(admin_only=True)
@timing
def list_users():
    page = AdminService(ctx=service_context()).list_users(parse_pagination())
    return json_response(_paged(admin_user_list_schema.dump(page.items), page))


@bp.post("/users/role")
@require_auth(admin_only=True)
@timing
def change_role():
    data = role_change_schema.load(json_body())
    user = AdminService(ctx=service_context()).set_role(data["user_id"], data["role"])
    return json_response({"data": admin_user_schema.dump(user)})


# -------------------------------- Projects ---------------------------------


@bp.get("/projects")
@require_auth(admin_only=True)
@timing
def list_projects():
    page = AdminService(ctx=service_context()).list_projects(parse_pagination())
    return json_response(_paged(project_list_schema.dump(page.items), page))


@bp.post("/projects/feature")
@require_auth(admin_only=True)
@timing
def feature_project():
    data = feature_schema.load(json_body())
    project = AdminService(ctx=service_context()).set_featured(
        data["project_id"], data["is_featured"]
    )
    return json_response({"data": project_schema.dump(project)})


@bp.delete("/projects")
@require_auth(admin_only=True)
@timing
def delete_project():
    """Delete any project by ``?id=``; goes through the audited override path."""

    data = project_id_schema.load(request.args)
    ProjectService(ctx=service_context(), blob_storage=get_blob_storage()).delete_project(
        data["id"]
    )
    return json_response({"data": {"message": "Project deleted"}})


# -------------------------------- Comments ---------------------------------


@bp.get("/comments")
@require_auth(admin_only=True)
@timing
def list_comments():
    data = comment_filter_schema.load(request.args)
    filters = CommentFilterIn(
        user_id=data.get("user_id"),
        project_id=data.get("project_id"),
        sort_by=SORT_FIELDS.get(data["sort_by"], data["sort_by"]),
        sort_order=data["sort_order"],
    )
    page = CommentService(ctx=service_context()).list_all(filters, parse_pagination())
    return json_response(_paged(comment_list_schema.dump(page.items), page))


@bp.delete("/comments/<int:comment_id>")
@require_auth(admin_only=True)
@timing
def delete_comment(comment_id: int):
    CommentService(ctx=service_context()).delete_comment(comment_id)
    return json_response({"data": {"message": "Comment deleted"}})


# ------------------------------- Dashboard ---------------------------------


@bp.get("/dashboard")
@require_auth(admin_only=True)
@timing
def dashboard():
    return json_response({"data": dashboard_schema.dump(AdminService().dashboard())})


@bp.get("/dashboard/project-stats")
@require_auth(admin_only=True)
@timing
def project_stats():
    return json_response({"data": project_stats_schema.dump(AdminService().project_stats())})


@bp.get("/dashboard/recent-projects")
@require_auth(admin_only=True)
@timing
def recent_projects():
    projects = AdminService().recent_projects()
    return json_response({"data": project_list_schema.dump(projects)})
