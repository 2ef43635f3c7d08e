"""HTTP flows for projects, their gallery and comments."""

from __future__ import annotations

import logging

from showcase.models.project import Project
from tests.factories.activity import CommentFactory
from tests.factories.project import MediaFactory, ProjectFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import sign_in
from tests.helpers.http import data_of, problem_of


def test_create_and_list_own_projects(client, session):
    owner = UserFactory()
    sign_in(client, owner)

    created = client.post(
        "/api/projects",
        json={"title": "Tiny Compiler", "tags": ["python", "parsing"], "isPublic": False},
    )

    assert created.status_code == 201
    body = data_of(created)
    assert body["userId"] == owner.id
    assert body["isPublic"] is False
    assert sorted(body["tags"]) == ["parsing", "python"]
    listed = data_of(client.get("/api/projects"))
    assert [p["title"] for p in listed] == ["Tiny Compiler"]


def test_listing_requires_session(client):
    assert problem_of(client.get("/api/projects")) == (401, "Authentication required")


def test_duplicate_title_for_same_owner_conflicts(client, session):
    project = ProjectFactory(title="Same Name")
    sign_in(client, project.owner)

    resp = client.post("/api/projects", json={"title": "Same Name"})

    assert resp.status_code == 409


def test_private_project_visibility(client, session):
    project = ProjectFactory(is_public=False)

    anonymous = client.get(f"/api/projects/{project.id}")
    sign_in(client, UserFactory())
    stranger = client.get(f"/api/projects/{project.id}")
    sign_in(client, AdminFactory())
    admin = client.get(f"/api/projects/{project.id}")

    assert problem_of(anonymous) == (403, "This project is private")
    assert stranger.status_code == 403
    assert admin.status_code == 200


def test_missing_project_is_404_before_ownership(client, session):
    sign_in(client, UserFactory())

    assert client.get("/api/projects/999999").status_code == 404
    assert client.put("/api/projects/999999", json={"title": "Nope"}).status_code == 404
    assert client.delete("/api/projects/999999").status_code == 404


def test_non_owner_cannot_update_or_delete(client, session):
    project = ProjectFactory(title="Keep Me")
    sign_in(client, UserFactory())

    update = client.put(f"/api/projects/{project.id}", json={"title": "Hijacked"})
    delete = client.delete(f"/api/projects/{project.id}")

    assert update.status_code == 403
    assert delete.status_code == 403
    session.expire_all()
    assert session.get(Project, project.id).title == "Keep Me"


def test_owner_updates_project(client, session):
    project = ProjectFactory(title="Before")
    sign_in(client, project.owner)

    resp = client.put(
        f"/api/projects/{project.id}", json={"title": "After", "tags": ["go"], "isPublic": False}
    )

    assert resp.status_code == 200
    assert data_of(resp)["title"] == "After"
    assert data_of(resp)["tags"] == ["go"]


def test_admin_override_is_audited(client, session, caplog):
    project = ProjectFactory()
    admin = AdminFactory()
    sign_in(client, admin)

    with caplog.at_level(logging.INFO):
        resp = client.delete(f"/api/projects/{project.id}")

    assert resp.status_code == 200
    overrides = [r for r in caplog.records if r.getMessage() == "authz.admin_override"]
    assert overrides
    assert overrides[0].actor_id == admin.id
    assert overrides[0].resource_id == project.id


def test_owner_delete_purges_media_blobs(client, session, blob_storage):
    media = MediaFactory(public_id="showcase/cover")
    sign_in(client, media.project.owner)

    resp = client.delete(f"/api/projects/{media.project_id}")

    assert resp.status_code == 200
    assert blob_storage.deleted == ["showcase/cover"]
    session.expire_all()
    assert session.get(Project, media.project_id) is None


def test_media_attach_respects_gallery_cap(client, session, app, monkeypatch):
    monkeypatch.setitem(app.config, "MAX_MEDIA_PER_PROJECT", 2)
    project = ProjectFactory()
    sign_in(client, project.owner)
    url = f"/api/projects/{project.id}/media"

    statuses = [
        client.post(url, json={"url": f"https://cdn/x{i}.png", "publicId": f"x{i}"}).status_code
        for i in range(3)
    ]

    assert statuses == [201, 201, 400]
    assert len(data_of(client.get(url))) == 2


def test_batch_attach_stores_every_item(client, session):
    project = ProjectFactory()
    sign_in(client, project.owner)
    items = [
        {"url": "https://cdn/a.png", "publicId": "a", "altText": "front"},
        {"url": "https://cdn/b.png", "publicId": "b"},
    ]

    resp = client.post(f"/api/projects/{project.id}/media/attach", json={"mediaItems": items})

    assert resp.status_code == 201
    assert sorted(m["publicId"] for m in data_of(resp)) == ["a", "b"]
    assert len(data_of(client.get(f"/api/projects/{project.id}/media"))) == 2


def test_batch_attach_is_all_or_nothing(client, session, app, monkeypatch):
    monkeypatch.setitem(app.config, "MAX_MEDIA_PER_PROJECT", 2)
    media = MediaFactory()
    project_id = media.project_id
    sign_in(client, media.project.owner)
    url = f"/api/projects/{project_id}/media/attach"
    items = [{"url": f"https://cdn/{i}.png", "publicId": f"n{i}"} for i in range(2)]

    too_many = client.post(url, json={"mediaItems": items})
    empty = client.post(url, json={"mediaItems": []})
    missing = client.post(url, json={})

    assert too_many.status_code == 400
    assert empty.get_json()["code"] == "validation_error"
    assert missing.get_json()["code"] == "validation_error"
    assert len(data_of(client.get(f"/api/projects/{project_id}/media"))) == 1


def test_batch_attach_checks_project_access(client, session):
    project = ProjectFactory()
    payload = {"mediaItems": [{"url": "https://cdn/a.png", "publicId": "a"}]}

    anonymous = client.post(f"/api/projects/{project.id}/media/attach", json=payload)
    sign_in(client, UserFactory())
    stranger = client.post(f"/api/projects/{project.id}/media/attach", json=payload)
    missing = client.post("/api/projects/999999/media/attach", json=payload)

    assert anonymous.status_code == 401
    assert stranger.status_code == 403
    assert missing.status_code == 404


def test_media_delete_checks_project_match(client, session, blob_storage):
    media = MediaFactory()
    other = ProjectFactory(owner=media.project.owner)
    sign_in(client, media.project.owner)

    mismatch = client.delete(f"/api/projects/{other.id}/media/{media.id}")
    missing = client.delete(f"/api/projects/{media.project_id}/media/999999")
    ok = client.delete(f"/api/projects/{media.project_id}/media/{media.id}")

    assert mismatch.status_code == 400
    assert missing.status_code == 404
    assert ok.status_code == 200
    assert blob_storage.deleted == [media.public_id]


def test_stranger_cannot_touch_gallery(client, session):
    media = MediaFactory()
    sign_in(client, UserFactory())

    resp = client.delete(f"/api/projects/{media.project_id}/media/{media.id}")

    assert resp.status_code == 403


def test_comments_flow(client, session):
    project = ProjectFactory()
    CommentFactory(project=project, content="First!")
    commenter = UserFactory()

    anonymous_post = client.post(f"/api/projects/{project.id}/comments", json={"content": "hi"})
    sign_in(client, commenter)
    blank = client.post(f"/api/projects/{project.id}/comments", json={"content": "   "})
    created = client.post(f"/api/projects/{project.id}/comments", json={"content": "Nice work"})

    assert anonymous_post.status_code == 401
    assert blank.status_code == 400
    assert created.status_code == 201
    assert data_of(created)["userId"] == commenter.id
    contents = [c["content"] for c in data_of(client.get(f"/api/projects/{project.id}/comments"))]
    assert set(contents) == {"First!", "Nice work"}


def test_comments_on_private_project_are_hidden(client, session):
    project = ProjectFactory(is_public=False)

    assert client.get(f"/api/projects/{project.id}/comments").status_code == 403
    sign_in(client, project.owner)
    assert client.get(f"/api/projects/{project.id}/comments").status_code == 200
