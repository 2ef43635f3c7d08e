"""Notification repository."""

from __future__ import annotations

from sqlalchemy import update

from showcase.models.notification import Notification, NotificationStatus
from showcase.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    def _sortable_fields(self):
        return {"id": Notification.id, "created_at": Notification.created_at}

    def _filterable_fields(self):
        return {"user_id": Notification.user_id, "status": Notification.status}

    def list_for_user(self, user_id: int) -> list[Notification]:
        return self.list(filters={"user_id": user_id}, sort=["-created_at", "-id"])

    def mark_all_read(self, user_id: int) -> int:
        """Flip every unread notification of ``user_id`` to READ.

        :returns: Number of rows updated.
        """
        stmt = (
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.status == NotificationStatus.UNREAD,
            )
            .values(status=NotificationStatus.READ)
            .execution_options(synchronize_session="fetch")
        )
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)
