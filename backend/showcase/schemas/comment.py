"""Comment schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import PaginationQuerySchema, UserSummarySchema


class CommentSchema(Schema):
    id = fields.Integer(required=True)
    project_id = fields.Integer(required=True, data_key="projectId")
    user_id = fields.Integer(required=True, data_key="userId")
    content = fields.String(required=True)
    author = fields.Nested(UserSummarySchema, allow_none=True, data_key="user")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class CommentCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    content = fields.String(required=True, validate=validate.Length(max=5000))


class CommentFilterSchema(PaginationQuerySchema):
    """Admin comment listing query (``userId``, ``projectId``, ``sortBy``, ``sortOrder``)."""

    user_id = fields.Integer(load_default=None, data_key="userId")
    project_id = fields.Integer(load_default=None, data_key="projectId")
    sort_by = fields.String(
        load_default="created_at",
        data_key="sortBy",
        validate=validate.OneOf(["created_at", "updated_at", "createdAt", "updatedAt"]),
    )
    sort_order = fields.String(
        load_default="desc", data_key="sortOrder", validate=validate.OneOf(["asc", "desc"])
    )
