"""Public exploration: project listing, featured projects, profiles."""

from __future__ import annotations

from showcase.repositories.base import Page
from showcase.services._shared.base import BaseService
from showcase.services._shared.errors import NotFoundError
from showcase.services.explore.dto import PublicProfileOut, PublicProjectQueryIn
from showcase.services.projects.dto import ProjectOut, to_project_out

FEATURED_LIMIT = 3
TOP_TAGS_LIMIT = 5


class ExploreService(BaseService):
    """Read-only views over public data. No authentication needed."""

    def list_public(self, query: PublicProjectQueryIn) -> Page[ProjectOut]:
        pagination = self.ensure_pagination(
            page=query.page, limit=query.limit, sort=["-created_at"]
        )
        with self.ro_uow() as uow:
            result = uow.projects.paginate_public(
                pagination, tag=query.tag or None, search=query.search or None
            )
            return Page(
                items=[to_project_out(p) for p in result.items],
                total=result.total,
                page=result.page,
                limit=result.limit,
            )

    def featured(self) -> list[ProjectOut]:
        """Up to three featured public projects, most recently updated first."""
        with self.ro_uow() as uow:
            return [to_project_out(p) for p in uow.projects.featured(limit=FEATURED_LIMIT)]

    def public_profile(self, username: str) -> PublicProfileOut:
        """
        Public profile by username.

        :raises NotFoundError: If no user holds ``username``.
        """
        with self.ro_uow() as uow:
            user = uow.users.get_by_username(username)
            if user is None:
                raise NotFoundError("User", username)
            projects = [to_project_out(p) for p in uow.projects.public_for_owner(user.id)]
            top_tags = uow.projects.top_tags_for_owner(
                user.id, public_only=True, limit=TOP_TAGS_LIMIT
            )
            return PublicProfileOut(
                id=user.id,
                username=user.username or username,
                first_name=user.first_name,
                last_name=user.last_name,
                profile_image=user.profile_image,
                bio=user.bio,
                website=user.website,
                github=user.github,
                twitter=user.twitter,
                created_at=user.created_at,
                projects=projects,
                project_count=len(projects),
                latest_project=projects[0] if projects else None,
                top_tags=top_tags,
            )
