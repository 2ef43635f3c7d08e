"""In-app notifications delivered to users."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from showcase.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .user import User


class NotificationType(str, Enum):
    REPORT = "REPORT"
    PROJECT = "PROJECT"
    GENERAL = "GENERAL"


class NotificationStatus(str, Enum):
    UNREAD = "UNREAD"
    READ = "READ"


class Notification(PKMixin, TimestampMixin, ReprMixin, db.Model):
    """Message addressed to ``user_id``; ``link`` points at a frontend route."""

    __tablename__ = "notifications"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[NotificationType] = mapped_column(
        SAEnum(NotificationType, name="notification_type", native_enum=True, create_constraint=True),
        nullable=False,
        default=NotificationType.GENERAL,
    )
    status: Mapped[NotificationStatus] = mapped_column(
        SAEnum(
            NotificationStatus, name="notification_status", native_enum=True, create_constraint=True
        ),
        nullable=False,
        default=NotificationStatus.UNREAD,
    )
    link: Mapped[str | None] = mapped_column(String(500))

    __table_args__ = (Index("ix_notifications_user_status", "user_id", "status"),)

    user: Mapped[User] = relationship("User", back_populates="notifications")
