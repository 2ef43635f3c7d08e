"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from showcase.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    paginate_select,
)
from showcase.repositories.comment import CommentRepository
from showcase.repositories.media import MediaRepository
from showcase.repositories.notification import NotificationRepository
from showcase.repositories.project import ProjectRepository
from showcase.repositories.report import ReportRepository
from showcase.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    # Domain
    "CommentRepository",
    "MediaRepository",
    "NotificationRepository",
    "ProjectRepository",
    "ReportRepository",
    "UserRepository",
]
