"""Report schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import PaginationQuerySchema, UserSummarySchema

REPORT_REASONS = ["SPAM", "INAPPROPRIATE", "COPYRIGHT", "OTHER"]
REPORT_STATUSES = ["PENDING", "REVIEWED", "IGNORED", "RESOLVED"]


class ReportCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    project_id = fields.Integer(required=True, data_key="projectId")
    reason = fields.String(required=True, validate=validate.OneOf(REPORT_REASONS))
    details = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=2000))


class ReportStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.String(
        required=True, validate=validate.OneOf(REPORT_STATUSES, error="Invalid status value")
    )


class ReportFilterSchema(PaginationQuerySchema):
    status = fields.String(load_default=None, validate=validate.OneOf(REPORT_STATUSES))
    reason = fields.String(load_default=None, validate=validate.OneOf(REPORT_REASONS))


class ReportSchema(Schema):
    id = fields.Integer(required=True)
    project_id = fields.Integer(required=True, data_key="projectId")
    project_title = fields.String(allow_none=True, data_key="projectTitle")
    owner_id = fields.Integer(data_key="ownerId")
    reporter = fields.Nested(UserSummarySchema, allow_none=True)
    reason = fields.String()
    details = fields.String(allow_none=True)
    status = fields.String()
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")
