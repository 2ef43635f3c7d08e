"""Unit tests for ProjectRepository."""

from __future__ import annotations

import pytest

from showcase.models.project import ProjectStatus
from showcase.repositories.base import Pagination
from showcase.repositories.project import ProjectRepository
from tests.factories.project import ProjectFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def repo():
    return ProjectRepository()


def test_exists_title_for_owner(repo, session):
    project = ProjectFactory(title="Parser")

    assert repo.exists_title_for_owner(project.user_id, " Parser ")
    assert not repo.exists_title_for_owner(project.user_id, "Parser", exclude_id=project.id)
    assert not repo.exists_title_for_owner(project.user_id + 1000, "Parser")


def test_replace_tags_dedupes_and_lowercases(repo, session):
    project = ProjectFactory(tags=["old"])

    repo.replace_tags(project, ["Flask", "flask", " SQL ", ""])

    assert sorted(project.tag_names) == ["flask", "sql"]


def test_top_tags_respect_visibility(repo, session):
    owner = UserFactory()
    ProjectFactory(owner=owner, tags=["python", "cli"])
    ProjectFactory(owner=owner, tags=["python"])
    ProjectFactory(owner=owner, tags=["secret"], is_public=False)

    assert repo.top_tags_for_owner(owner.id, public_only=True) == ["python", "cli"]
    assert "secret" in repo.top_tags_for_owner(owner.id, public_only=False)


def test_paginate_public_filters(repo, session):
    ProjectFactory(title="Ray Tracer", description="pixels", tags=["graphics"])
    ProjectFactory(title="Hidden", is_public=False, tags=["graphics"])
    ProjectFactory(title="Chat", description="sockets everywhere")
    page = Pagination(page=1, limit=10, sort=["-created_at"])

    tagged = repo.paginate_public(page, tag="GRAPHICS")
    searched = repo.paginate_public(page, search="socket")

    assert [p.title for p in tagged.items] == ["Ray Tracer"]
    assert tagged.total == 1
    assert [p.title for p in searched.items] == ["Chat"]


def test_featured_only_public(repo, session):
    shown = ProjectFactory(is_featured=True)
    ProjectFactory(is_featured=True, is_public=False)
    ProjectFactory()

    assert [p.id for p in repo.featured(limit=3)] == [shown.id]


def test_counts(repo, session):
    ProjectFactory(status=ProjectStatus.PUBLISHED)
    ProjectFactory(status=ProjectStatus.PUBLISHED, is_public=False)
    ProjectFactory(status=ProjectStatus.ARCHIVED)

    assert repo.count_active_public() == 1
    assert repo.count_by_status() == {"DEVELOPMENT": 0, "PUBLISHED": 2, "ARCHIVED": 1}
