"""JSON endpoint blueprints mounted under the API prefix."""

from __future__ import annotations

from flask import Blueprint

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .admin import bp as admin_bp  # noqa: E402
from .auth import bp as auth_bp  # noqa: E402
from .explore import bp as explore_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .notifications import bp as notifications_bp  # noqa: E402
from .projects import bp as projects_bp  # noqa: E402
from .reports import bp as reports_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_api_root)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/health
    (auth_bp, "/auth"),  # -> /api/auth
    (projects_bp, "/projects"),
    (explore_bp, ""),  # -> /api/public-projects, /api/profile/<username>
    (reports_bp, ""),  # -> /api/reports, /api/user/reports
    (notifications_bp, "/notifications"),
    (admin_bp, "/admin"),
]
