"""In-app notifications."""

from __future__ import annotations

from showcase.models.notification import Notification, NotificationStatus, NotificationType
from showcase.services._shared.base import BaseService
from showcase.services._shared.errors import NotFoundError, ServiceError
from showcase.services.notifications.dto import (
    NotificationCreateIn,
    NotificationOut,
    to_notification_out,
)


def parse_type(raw: str | None) -> NotificationType:
    """
    Map a public type string to :class:`NotificationType` (default GENERAL).

    :raises ServiceError: If ``raw`` is not a known type.
    """
    if not raw:
        return NotificationType.GENERAL
    try:
        return NotificationType(raw.upper())
    except ValueError as exc:
        raise ServiceError(f"Unknown notification type: {raw!r}") from exc


def notify(
    uow,
    *,
    user_id: int,
    message: str,
    type: NotificationType,
    link: str | None = None,
) -> Notification:
    """Stage a notification inside the caller's Unit of Work."""
    notification = Notification(user_id=user_id, message=message, type=type, link=link)
    uow.notifications.add(notification)
    return notification


class NotificationService(BaseService):
    """
    Per-user notification inbox.

    Reading and acknowledging are strictly owner-only; the admin role grants
    no access to other users' inboxes.
    """

    def list_mine(self) -> list[NotificationOut]:
        user_id = self.require_actor()
        with self.ro_uow() as uow:
            return [to_notification_out(n) for n in uow.notifications.list_for_user(user_id)]

    def create(self, dto: NotificationCreateIn) -> NotificationOut:
        """
        Create a notification for ``dto.user_id``.

        :raises NotFoundError: If the recipient does not exist.
        :raises ServiceError: If the message is blank or the type unknown.
        """
        if not dto.message or not dto.message.strip():
            raise ServiceError("Notification message is required")
        ntype = parse_type(dto.type)
        with self.rw_uow() as uow:
            if uow.users.get(dto.user_id) is None:
                raise NotFoundError("User", dto.user_id)
            notification = notify(
                uow, user_id=dto.user_id, message=dto.message.strip(), type=ntype, link=dto.link
            )
            return to_notification_out(notification)

    def mark_read(self, notification_id: int) -> NotificationOut:
        """
        Mark one notification as read.

        :raises NotFoundError: If it does not exist.
        :raises AuthorizationError: If it belongs to someone else.
        """
        self.require_actor()
        with self.rw_uow() as uow:
            notification = uow.notifications.get(notification_id)
            if notification is None:
                raise NotFoundError("Notification", notification_id)
            self.ensure_owner(notification.user_id, msg="You can only read your own notifications.")
            notification.status = NotificationStatus.READ
            uow.notifications.flush()
            return to_notification_out(notification)

    def mark_all_read(self) -> int:
        """Mark every unread notification of the caller; return how many changed."""
        user_id = self.require_actor()
        with self.rw_uow() as uow:
            return uow.notifications.mark_all_read(user_id)
