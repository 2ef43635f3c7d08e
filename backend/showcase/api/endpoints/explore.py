"""Public exploration endpoints (no session required)."""

from __future__ import annotations

from flask import Blueprint, request

from showcase.api.deps import json_response, timing
from showcase.schemas import ProjectSchema, PublicProfileSchema, PublicProjectQuerySchema, build_meta
from showcase.services.explore.dto import PublicProjectQueryIn
from showcase.services.explore.service import ExploreService

bp = Blueprint("explore", __name__)

project_list_schema = ProjectSchema(many=True)
public_profile_schema = PublicProfileSchema()
public_query_schema = PublicProjectQuerySchema(default_limit=12, max_limit=50)


@bp.get("/public-projects")
@timing
def list_public_projects():
    """Paginated public projects filtered by ``tag`` and ``search``."""

    data = public_query_schema.load(request.args)
    page = ExploreService().list_public(
        PublicProjectQueryIn(
            page=data["page"], limit=data["limit"], tag=data.get("tag"), search=data.get("search")
        )
    )
    return json_response(
        {
            "data": project_list_schema.dump(page.items),
            "meta": build_meta(total=page.total, page=page.page, limit=page.limit),
        }
    )


@bp.get("/public-projects/featured")
@timing
def featured_projects():
    return json_response({"data": project_list_schema.dump(ExploreService().featured())})


@bp.get("/profile/<string:username>")
@timing
def public_profile(username: str):
    profile = ExploreService().public_profile(username)
    return json_response({"data": public_profile_schema.dump(profile)})
