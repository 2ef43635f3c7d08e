"""Notification inbox endpoints."""

from __future__ import annotations

from flask import Blueprint

from showcase.api.deps import (
    json_body,
    json_response,
    require_admin,
    require_auth,
    service_context,
    timing,
)
from showcase.schemas import NotificationCreateSchema, NotificationSchema
from showcase.services.notifications.dto import NotificationCreateIn
from showcase.services.notifications.service import NotificationService

bp = Blueprint("notifications", __name__, url_prefix="/notifications")

notification_schema = NotificationSchema()
notification_list_schema = NotificationSchema(many=True)
notification_create_schema = NotificationCreateSchema()


@bp.get("")
@require_auth
@timing
def list_notifications():
    items = NotificationService(ctx=service_context()).list_mine()
    return json_response({"data": notification_list_schema.dump(items)})


@bp.post("")
@require_admin
@timing
def create_notification():
    data = notification_create_schema.load(json_body())
    notification = NotificationService(ctx=service_context()).create(NotificationCreateIn(**data))
    return json_response({"data": notification_schema.dump(notification)}, status=201)


@bp.route("/<int:notification_id>/read", methods=["PATCH", "POST"])
@require_auth
@timing
def mark_read(notification_id: int):
    notification = NotificationService(ctx=service_context()).mark_read(notification_id)
    return json_response({"data": notification_schema.dump(notification)})


@bp.post("/read-all")
@require_auth
@timing
def mark_all_read():
    count = NotificationService(ctx=service_context()).mark_all_read()
    return json_response({"data": {"count": count}})
