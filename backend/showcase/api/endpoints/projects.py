"""Project, gallery and comment endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app

from showcase.api.deps import (
    get_blob_storage,
    json_body,
    json_response,
    require_auth,
    service_context,
    timing,
)
from showcase.schemas import (
    CommentCreateSchema,
    CommentSchema,
    MediaAttachSchema,
    MediaBatchAttachSchema,
    MediaSchema,
    ProjectCreateSchema,
    ProjectSchema,
    ProjectUpdateSchema,
)
from showcase.services.comments.service import CommentService
from showcase.services.media.dto import MediaAttachIn
from showcase.services.media.service import DEFAULT_MAX_MEDIA_PER_PROJECT, MediaService
from showcase.services.projects.dto import ProjectCreateIn, ProjectUpdateIn
from showcase.services.projects.service import ProjectService

bp = Blueprint("projects", __name__, url_prefix="/projects")

project_schema = ProjectSchema()
project_list_schema = ProjectSchema(many=True)
project_create_schema = ProjectCreateSchema()
project_update_schema = ProjectUpdateSchema()
media_schema = MediaSchema()
media_list_schema = MediaSchema(many=True)
media_attach_schema = MediaAttachSchema()
media_batch_schema = MediaBatchAttachSchema()
comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)
comment_create_schema = CommentCreateSchema()


def _projects() -> ProjectService:
    return ProjectService(ctx=service_context(), blob_storage=get_blob_storage())


def _media() -> MediaService:
    return MediaService(
        ctx=service_context(),
        blob_storage=get_blob_storage(),
        max_per_project=int(
            current_app.config.get("MAX_MEDIA_PER_PROJECT", DEFAULT_MAX_MEDIA_PER_PROJECT)
        ),
    )


# ------------------------------- Projects ----------------------------------


@bp.get("")
@require_auth
@timing
def list_my_projects():
    """Return the caller's projects."""

    return json_response({"data": project_list_schema.dump(_projects().list_mine())})


@bp.post("")
@require_auth
@timing
def create_project():
    payload = project_create_schema.load(json_body())
    project = _projects().create_project(ProjectCreateIn(**payload))
    return json_response({"data": project_schema.dump(project)}, status=201)


@bp.get("/<int:project_id>")
@timing
def get_project(project_id: int):
    """Public projects for anyone; private ones for the owner or an admin."""

    return json_response({"data": project_schema.dump(_projects().get_project(project_id))})


@bp.put("/<int:project_id>")
@require_auth
@timing
def update_project(project_id: int):
    payload = project_update_schema.load(json_body())
    project = _projects().update_project(project_id, ProjectUpdateIn(**payload))
    return json_response({"data": project_schema.dump(project)})


@bp.delete("/<int:project_id>")
@require_auth
@timing
def delete_project(project_id: int):
    _projects().delete_project(project_id)
    return json_response({"data": {"message": "Project deleted"}})


# -------------------------------- Media ------------------------------------


@bp.get("/<int:project_id>/media")
@require_auth
@timing
def list_media(project_id: int):
    return json_response({"data": media_list_schema.dump(_media().list_media(project_id))})


@bp.post("/<int:project_id>/media")
@require_auth
@timing
def attach_media(project_id: int):
    payload = media_attach_schema.load(json_body())
    media = _media().attach_media(project_id, MediaAttachIn(**payload))
    return json_response({"data": media_schema.dump(media)}, status=201)


@bp.post("/<int:project_id>/media/attach")
@require_auth
@timing
def attach_media_batch(project_id: int):
    """Attach a ``mediaItems`` list of uploaded assets in one go."""

    payload = media_batch_schema.load(json_body())
    items = [MediaAttachIn(**item) for item in payload["media_items"]]
    media = _media().attach_many(project_id, items)
    return json_response({"data": media_list_schema.dump(media)}, status=201)


@bp.delete("/<int:project_id>/media/<int:media_id>")
@require_auth
@timing
def delete_media(project_id: int, media_id: int):
    _media().delete_media(project_id, media_id)
    return json_response({"data": {"message": "Media deleted"}})


# ------------------------------- Comments ----------------------------------


@bp.get("/<int:project_id>/comments")
@timing
def list_comments(project_id: int):
    comments = CommentService(ctx=service_context()).list_for_project(project_id)
    return json_response({"data": comment_list_schema.dump(comments)})


@bp.post("/<int:project_id>/comments")
@require_auth
@timing
def add_comment(project_id: int):
    data = comment_create_schema.load(json_body())
    comment = CommentService(ctx=service_context()).add_comment(project_id, data["content"])
    return json_response({"data": comment_schema.dump(comment)}, status=201)
