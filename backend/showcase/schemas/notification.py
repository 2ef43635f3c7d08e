"""Notification schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class NotificationSchema(Schema):
    id = fields.Integer(required=True)
    user_id = fields.Integer(data_key="userId")
    message = fields.String()
    type = fields.String()
    status = fields.String()
    link = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class NotificationCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True, data_key="userId")
    message = fields.String(required=True, validate=validate.Length(min=1, max=2000))
    type = fields.String(
        load_default="GENERAL", validate=validate.OneOf(["REPORT", "PROJECT", "GENERAL"])
    )
    link = fields.String(load_default=None, allow_none=True, validate=validate.Length(max=500))
