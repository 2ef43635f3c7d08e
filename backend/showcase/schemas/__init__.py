"""Convenience exports for API schemas."""

from __future__ import annotations

from .admin import DashboardSchema, ProjectStatsSchema
from .auth import (
    AuthUserSchema,
    ChangePasswordSchema,
    LoginSchema,
    RegisterSchema,
    SessionUserSchema,
)
from .comment import CommentCreateSchema, CommentFilterSchema, CommentSchema
from .common import MetaSchema, PaginationQuerySchema, UserSummarySchema, build_meta
from .notification import NotificationCreateSchema, NotificationSchema
from .project import (
    FeatureProjectSchema,
    MediaAttachSchema,
    MediaBatchAttachSchema,
    MediaSchema,
    ProjectCreateSchema,
    ProjectIdQuerySchema,
    ProjectSchema,
    ProjectUpdateSchema,
    PublicProjectQuerySchema,
)
from .report import ReportCreateSchema, ReportFilterSchema, ReportSchema, ReportStatusSchema
from .user import (
    AdminUserSchema,
    ProfileSchema,
    ProfileUpdateSchema,
    PublicProfileSchema,
    RoleChangeSchema,
    UsernameChangeSchema,
    UsernameSchema,
)

__all__ = [
    "AdminUserSchema",
    "AuthUserSchema",
    "ChangePasswordSchema",
    "CommentCreateSchema",
    "CommentFilterSchema",
    "CommentSchema",
    "DashboardSchema",
    "FeatureProjectSchema",
    "LoginSchema",
    "MediaAttachSchema",
    "MediaBatchAttachSchema",
    "MediaSchema",
    "MetaSchema",
    "NotificationCreateSchema",
    "NotificationSchema",
    "PaginationQuerySchema",
    "ProfileSchema",
    "ProfileUpdateSchema",
    "ProjectCreateSchema",
    "ProjectIdQuerySchema",
    "ProjectSchema",
    "ProjectStatsSchema",
    "ProjectUpdateSchema",
    "PublicProfileSchema",
    "PublicProjectQuerySchema",
    "RegisterSchema",
    "ReportCreateSchema",
    "ReportFilterSchema",
    "ReportSchema",
    "ReportStatusSchema",
    "RoleChangeSchema",
    "SessionUserSchema",
    "UserSummarySchema",
    "UsernameChangeSchema",
    "UsernameSchema",
    "build_meta",
]
