"""ProjectService: visibility and the 404 → 403 → mutate order."""

from __future__ import annotations

import logging

import pytest

from showcase.models.project import Project
from showcase.services._shared.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
)
from showcase.services._shared.ports import InMemoryBlobStorage
from showcase.services.projects.dto import ProjectCreateIn, ProjectUpdateIn
from showcase.services.projects.service import ProjectService
from tests.factories.project import MediaFactory, ProjectFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import context_for


def _service(user=None, storage=None) -> ProjectService:
    return ProjectService(ctx=context_for(user), blob_storage=storage)


def test_create_normalizes_tags(session):
    user = UserFactory()

    out = _service(user).create_project(
        ProjectCreateIn(title="  My App  ", tags=["Python", "python", " Flask "])
    )

    assert out.title == "My App"
    assert out.user_id == user.id
    assert sorted(out.tags) == ["flask", "python"]
    assert out.status == "DEVELOPMENT"


def test_duplicate_title_for_same_owner_conflicts(session):
    user = UserFactory()
    ProjectFactory(owner=user, title="Portfolio")

    with pytest.raises(ConflictError):
        _service(user).create_project(ProjectCreateIn(title="Portfolio"))


def test_same_title_for_other_owner_is_fine(session):
    ProjectFactory(title="Portfolio")

    out = _service(UserFactory()).create_project(ProjectCreateIn(title="Portfolio"))

    assert out.title == "Portfolio"


def test_private_project_hidden_from_strangers(session):
    project = ProjectFactory(is_public=False)

    with pytest.raises(AuthorizationError, match="private"):
        _service(UserFactory()).get_project(project.id)
    with pytest.raises(AuthorizationError):
        _service(None).get_project(project.id)


def test_private_project_visible_to_owner_and_admin(session):
    project = ProjectFactory(is_public=False)

    assert _service(project.owner).get_project(project.id).id == project.id
    assert _service(AdminFactory()).get_project(project.id).id == project.id


def test_missing_project_is_404_before_ownership(session):
    with pytest.raises(NotFoundError):
        _service(UserFactory()).update_project(999_999, ProjectUpdateIn(title="Nope"))


def test_stranger_cannot_update_and_nothing_changes(session):
    project = ProjectFactory(title="Original")

    with pytest.raises(AuthorizationError):
        _service(UserFactory()).update_project(project.id, ProjectUpdateIn(title="Hijacked"))

    session.expire_all()
    assert session.get(Project, project.id).title == "Original"


def test_owner_updates_fields_and_tags(session):
    project = ProjectFactory(tags=["old"])

    out = _service(project.owner).update_project(
        project.id, ProjectUpdateIn(description="new text", is_public=False, tags=["new"])
    )

    assert out.description == "new text"
    assert out.is_public is False
    assert out.tags == ["new"]


def test_admin_override_update(session, caplog):
    caplog.set_level(logging.INFO)
    project = ProjectFactory()
    admin = AdminFactory()

    out = _service(admin).update_project(project.id, ProjectUpdateIn(status="ARCHIVED"))

    assert out.status == "ARCHIVED"
    assert "authz.admin_override" in caplog.text


def test_delete_purges_media_blobs(session):
    storage = InMemoryBlobStorage()
    project = ProjectFactory()
    MediaFactory(project=project, public_id="p/one")
    MediaFactory(project=project, public_id="p/two")

    _service(project.owner, storage).delete_project(project.id)

    assert sorted(storage.deleted) == ["p/one", "p/two"]
    assert session.get(Project, project.id) is None


def test_delete_survives_blob_failures(session):
    storage = InMemoryBlobStorage(failing={"p/bad"})
    project = ProjectFactory()
    MediaFactory(project=project, public_id="p/bad")
    MediaFactory(project=project, public_id="p/good")

    _service(project.owner, storage).delete_project(project.id)

    assert storage.deleted == ["p/good"]
    assert session.get(Project, project.id) is None


def test_stranger_cannot_delete(session):
    project = ProjectFactory()

    with pytest.raises(AuthorizationError):
        _service(UserFactory()).delete_project(project.id)

    assert session.get(Project, project.id) is not None


def test_list_mine_returns_only_own_projects(session):
    user = UserFactory()
    ProjectFactory(owner=user, title="Mine A")
    ProjectFactory(owner=user, title="Mine B", is_public=False)
    ProjectFactory(title="Theirs")

    titles = {p.title for p in _service(user).list_mine()}

    assert titles == {"Mine A", "Mine B"}
