from showcase.models.comment import Comment
from showcase.models.media import Media
from showcase.models.notification import Notification, NotificationStatus, NotificationType
from showcase.models.project import Project, ProjectStatus, ProjectTag
from showcase.models.report import OPEN_REPORT_STATUSES, Report, ReportReason, ReportStatus
from showcase.models.user import Role, User

__all__ = [
    "Comment",
    "Media",
    "Notification",
    "NotificationStatus",
    "NotificationType",
    "OPEN_REPORT_STATUSES",
    "Project",
    "ProjectStatus",
    "ProjectTag",
    "Report",
    "ReportReason",
    "ReportStatus",
    "Role",
    "User",
]
