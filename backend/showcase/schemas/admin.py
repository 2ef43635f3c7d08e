"""Admin dashboard schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class DashboardSchema(Schema):
    total_users = fields.Integer(data_key="totalUsers")
    total_projects = fields.Integer(data_key="totalProjects")
    active_public_projects = fields.Integer(data_key="activePublicProjects")
    recent_projects = fields.Integer(data_key="recentProjects")


class MonthlyCountSchema(Schema):
    month = fields.String()
    count = fields.Integer()


class ProjectStatsSchema(Schema):
    status_stats = fields.Dict(keys=fields.String(), values=fields.Integer(), data_key="statusStats")
    visibility_stats = fields.Dict(
        keys=fields.String(), values=fields.Integer(), data_key="visibilityStats"
    )
    monthly_trends = fields.List(fields.Nested(MonthlyCountSchema), data_key="monthlyTrends")
    total_users = fields.Integer(data_key="totalUsers")
    total_projects = fields.Integer(data_key="totalProjects")
    avg_projects_per_user = fields.Float(data_key="avgProjectsPerUser")
