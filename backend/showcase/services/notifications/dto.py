"""DTOs for NotificationService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from showcase.models.notification import Notification


@dataclass(frozen=True, slots=True)
class NotificationCreateIn:
    """
    Input DTO for an admin-issued notification.

    :param user_id: Recipient.
    :param message: Text shown to the recipient.
    :param type: ``REPORT`` / ``PROJECT`` / ``GENERAL``.
    :param link: Optional in-app link.
    """

    user_id: int
    message: str
    type: str = "GENERAL"
    link: str | None = None


@dataclass(frozen=True, slots=True)
class NotificationOut:
    id: int
    user_id: int
    message: str
    type: str
    status: str
    link: str | None
    created_at: datetime | None


def to_notification_out(n: Notification) -> NotificationOut:
    return NotificationOut(
        id=n.id,
        user_id=n.user_id,
        message=n.message,
        type=n.type.value,
        status=n.status.value,
        link=n.link,
        created_at=n.created_at,
    )
