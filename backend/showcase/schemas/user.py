"""User profile schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .auth import USERNAME_MESSAGE, USERNAME_REGEX
from .common import UserSummarySchema
from .project import ProjectSchema


class ProfileUpdateSchema(Schema):
    """Editable profile fields; omitted keys stay unchanged."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(validate=validate.Length(max=254))
    first_name = fields.String(data_key="firstName", validate=validate.Length(max=100))
    last_name = fields.String(data_key="lastName", validate=validate.Length(max=100))
    profile_image = fields.String(data_key="profileImage", validate=validate.Length(max=500))
    bio = fields.String(validate=validate.Length(max=2000))
    website = fields.String(validate=validate.Length(max=500))
    github = fields.String(validate=validate.Length(max=100))
    twitter = fields.String(validate=validate.Length(max=100))


class UsernameSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.String(
        required=True, validate=validate.Regexp(USERNAME_REGEX, error=USERNAME_MESSAGE)
    )


class UsernameChangeSchema(Schema):
    username = fields.String(required=True)
    changed = fields.Boolean(required=True)


class ProfileSchema(Schema):
    """Private profile representation (owner only)."""

    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)
    first_name = fields.String(allow_none=True, data_key="firstName")
    last_name = fields.String(allow_none=True, data_key="lastName")
    profile_image = fields.String(allow_none=True, data_key="profileImage")
    bio = fields.String(allow_none=True)
    website = fields.String(allow_none=True)
    github = fields.String(allow_none=True)
    twitter = fields.String(allow_none=True)
    role = fields.String(required=True)
    username_last_changed = fields.DateTime(allow_none=True, data_key="usernameLastChanged")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class PublicProfileSchema(UserSummarySchema):
    """Public profile page payload."""

    bio = fields.String(allow_none=True)
    website = fields.String(allow_none=True)
    github = fields.String(allow_none=True)
    twitter = fields.String(allow_none=True)
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    projects = fields.List(fields.Nested(ProjectSchema))
    project_count = fields.Integer(data_key="projectCount")
    latest_project = fields.Nested(ProjectSchema, allow_none=True, data_key="latestProject")
    top_tags = fields.List(fields.String(), data_key="topTags")


class AdminUserSchema(Schema):
    id = fields.Integer(required=True)
    email = fields.Email(required=True)
    username = fields.String(allow_none=True)
    first_name = fields.String(allow_none=True, data_key="firstName")
    last_name = fields.String(allow_none=True, data_key="lastName")
    role = fields.String(required=True)
    project_count = fields.Integer(data_key="projectCount")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class RoleChangeSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.Integer(required=True, data_key="userId")
    role = fields.String(required=True, validate=validate.OneOf(["USER", "ADMIN"]))
