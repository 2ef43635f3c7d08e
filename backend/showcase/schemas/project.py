"""Project, media and tag schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from .common import PaginationQuerySchema, UserSummarySchema

PROJECT_STATUSES = ["DEVELOPMENT", "PUBLISHED", "ARCHIVED"]


class MediaSchema(Schema):
    id = fields.Integer(required=True)
    project_id = fields.Integer(required=True, data_key="projectId")
    url = fields.String(required=True)
    public_id = fields.String(allow_none=True, data_key="publicId")
    alt_text = fields.String(allow_none=True, data_key="altText")
    media_type = fields.String(data_key="mediaType")
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")


class MediaAttachSchema(Schema):
    """Reference to an asset already uploaded to the media host."""

    class Meta:
        unknown = EXCLUDE

    url = fields.String(required=True, validate=validate.Length(min=1, max=500))
    public_id = fields.String(
        required=True, data_key="publicId", validate=validate.Length(min=1, max=255)
    )
    alt_text = fields.String(
        load_default=None, allow_none=True, data_key="altText", validate=validate.Length(max=255)
    )
    media_type = fields.String(
        load_default="image", data_key="mediaType", validate=validate.OneOf(["image", "video"])
    )


class MediaBatchAttachSchema(Schema):
    """Several uploaded assets attached in one request."""

    class Meta:
        unknown = EXCLUDE

    media_items = fields.List(
        fields.Nested(MediaAttachSchema),
        required=True,
        data_key="mediaItems",
        validate=validate.Length(min=1, error="At least one media item is required."),
    )


class ProjectSchema(Schema):
    """Public representation of a project."""

    id = fields.Integer(required=True)
    user_id = fields.Integer(required=True, data_key="userId")
    title = fields.String(required=True)
    description = fields.String(allow_none=True)
    github_url = fields.String(allow_none=True, data_key="githubUrl")
    demo_url = fields.String(allow_none=True, data_key="demoUrl")
    is_public = fields.Boolean(data_key="isPublic")
    is_featured = fields.Boolean(data_key="isFeatured")
    status = fields.String()
    tags = fields.List(fields.String())
    owner = fields.Nested(UserSummarySchema, allow_none=True, data_key="user")
    media = fields.List(fields.Nested(MediaSchema))
    created_at = fields.DateTime(allow_none=True, data_key="createdAt")
    updated_at = fields.DateTime(allow_none=True, data_key="updatedAt")


class ProjectCreateSchema(Schema):
    """Payload for creating a project."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(required=True, validate=validate.Length(min=3, max=120))
    description = fields.String(load_default=None, allow_none=True)
    github_url = fields.String(
        load_default=None, allow_none=True, data_key="githubUrl", validate=validate.Length(max=500)
    )
    demo_url = fields.String(
        load_default=None, allow_none=True, data_key="demoUrl", validate=validate.Length(max=500)
    )
    is_public = fields.Boolean(load_default=True, data_key="isPublic")
    status = fields.String(load_default=None, validate=validate.OneOf(PROJECT_STATUSES))
    tags = fields.List(
        fields.String(validate=validate.Length(min=1, max=40)),
        load_default=list,
        validate=validate.Length(max=20),
    )


class ProjectUpdateSchema(Schema):
    """Partial update; omitted keys stay unchanged."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(validate=validate.Length(min=3, max=120))
    description = fields.String(allow_none=True)
    github_url = fields.String(
        allow_none=True, data_key="githubUrl", validate=validate.Length(max=500)
    )
    demo_url = fields.String(allow_none=True, data_key="demoUrl", validate=validate.Length(max=500))
    is_public = fields.Boolean(data_key="isPublic")
    status = fields.String(validate=validate.OneOf(PROJECT_STATUSES))
    tags = fields.List(
        fields.String(validate=validate.Length(min=1, max=40)), validate=validate.Length(max=20)
    )


class PublicProjectQuerySchema(PaginationQuerySchema):
    """Query parameters of the public project listing."""

    tag = fields.String(load_default=None, validate=validate.Length(max=40))
    search = fields.String(load_default=None, validate=validate.Length(max=200))


class FeatureProjectSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    project_id = fields.Integer(required=True, data_key="projectId")
    is_featured = fields.Boolean(required=True, data_key="isFeatured")


class ProjectIdQuerySchema(Schema):
    """``?id=`` selector used by the admin project delete."""

    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(required=True)
