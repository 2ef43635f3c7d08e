"""HTTP flows for exploration, reports and notifications."""

from __future__ import annotations

from tests.factories.activity import NotificationFactory, ReportFactory
from tests.factories.project import ProjectFactory
from tests.factories.user import AdminFactory, UserFactory
from tests.helpers.auth import sign_in
from tests.helpers.http import data_of, problem_of

# ---------------------------------------------------------------- explore --


def test_public_listing_hides_private_projects(client, session):
    visible = ProjectFactory(title="Ray Tracer", tags=["graphics"])
    ProjectFactory(title="Secret Sauce", is_public=False)

    resp = client.get("/api/public-projects")

    body = resp.get_json()
    assert [p["id"] for p in body["data"]] == [visible.id]
    assert body["meta"]["total"] == 1
    assert body["meta"]["limit"] == 12


def test_public_listing_filters(client, session):
    ProjectFactory(title="Ray Tracer", tags=["graphics"])
    ProjectFactory(title="Chat Server", tags=["network"])

    by_tag = data_of(client.get("/api/public-projects?tag=graphics"))
    by_search = data_of(client.get("/api/public-projects?search=chat"))

    assert [p["title"] for p in by_tag] == ["Ray Tracer"]
    assert [p["title"] for p in by_search] == ["Chat Server"]


def test_public_listing_caps_limit(client, session):
    resp = client.get("/api/public-projects?limit=500")

    assert resp.get_json()["meta"]["limit"] == 50


def test_public_profile(client, session):
    owner = UserFactory(username="octo")
    ProjectFactory(owner=owner, tags=["python"])
    ProjectFactory(owner=owner, is_public=False)

    resp = client.get("/api/profile/octo")

    data = data_of(resp)
    assert data["username"] == "octo"
    assert data["projectCount"] == 1
    assert data["topTags"] == ["python"]
    assert "email" not in data
    assert client.get("/api/profile/nobody").status_code == 404


# ---------------------------------------------------------------- reports --


def test_anonymous_report_is_accepted(client, session):
    project = ProjectFactory()

    first = client.post("/api/reports", json={"projectId": project.id, "reason": "SPAM"})
    second = client.post("/api/reports", json={"projectId": project.id, "reason": "SPAM"})

    assert first.status_code == 201
    assert second.status_code == 201
    assert data_of(first)["reporter"] is None


def test_signed_in_duplicate_report_conflicts(client, session):
    project = ProjectFactory()
    reporter = UserFactory()
    sign_in(client, reporter)

    first = client.post("/api/reports", json={"projectId": project.id, "reason": "COPYRIGHT"})
    again = client.post("/api/reports", json={"projectId": project.id, "reason": "OTHER"})

    assert first.status_code == 201
    assert problem_of(again) == (409, "You have already reported this project")
    mine = data_of(client.get("/api/user/reports"))
    assert [r["projectId"] for r in mine] == [project.id]


def test_report_validation(client, session):
    bad_reason = client.post("/api/reports", json={"projectId": 1, "reason": "BORING"})
    missing_project = client.post("/api/reports", json={"projectId": 999999, "reason": "SPAM"})

    assert bad_reason.get_json()["code"] == "validation_error"
    assert missing_project.status_code == 404


def test_my_reports_requires_session(client):
    assert client.get("/api/user/reports").status_code == 401


def test_report_moderation_at_report_urls_is_admin_only(client, session):
    report = ReportFactory()
    url = f"/api/reports/{report.id}"

    assert problem_of(client.get("/api/reports")) == (401, "Authentication required")
    sign_in(client, UserFactory())
    assert problem_of(client.get(url)) == (403, "Admin privileges required")
    assert client.patch(url, json={"status": "REVIEWED"}).status_code == 403
    assert client.delete(url).status_code == 403


def test_admin_moderates_at_report_urls(client, session):
    report = ReportFactory()
    url = f"/api/reports/{report.id}"
    sign_in(client, AdminFactory())

    listed = client.get("/api/reports?status=PENDING")
    fetched = client.get(url)
    patched = client.patch(url, json={"status": "REVIEWED"})
    deleted = client.delete(url)

    assert [r["id"] for r in data_of(listed)] == [report.id]
    assert listed.get_json()["meta"]["total"] == 1
    assert data_of(fetched)["id"] == report.id
    assert data_of(patched)["status"] == "REVIEWED"
    assert deleted.status_code == 200
    assert client.get(url).status_code == 404


# ---------------------------------------------------------- notifications --


def test_inbox_is_owner_only(client, session):
    mine = NotificationFactory()
    theirs = NotificationFactory()
    sign_in(client, mine.user)

    inbox = data_of(client.get("/api/notifications"))
    foreign = client.post(f"/api/notifications/{theirs.id}/read")

    assert [n["id"] for n in inbox] == [mine.id]
    assert foreign.status_code == 403


def test_admin_cannot_read_foreign_notification(client, session):
    theirs = NotificationFactory()
    sign_in(client, AdminFactory())

    assert client.post(f"/api/notifications/{theirs.id}/read").status_code == 403


def test_mark_read_and_read_all(client, session):
    user = UserFactory()
    first, _, _ = NotificationFactory.create_batch(3, user=user)
    sign_in(client, user)

    one = client.post(f"/api/notifications/{first.id}/read")
    rest = client.post("/api/notifications/read-all")
    again = client.post("/api/notifications/read-all")

    assert data_of(one)["status"] == "READ"
    assert data_of(rest) == {"count": 2}
    assert data_of(again) == {"count": 0}
    assert client.post("/api/notifications/999999/read").status_code == 404


def test_mark_read_accepts_patch(client, session):
    mine = NotificationFactory()
    theirs = NotificationFactory()
    sign_in(client, mine.user)

    ok = client.patch(f"/api/notifications/{mine.id}/read")
    foreign = client.patch(f"/api/notifications/{theirs.id}/read")

    assert data_of(ok)["status"] == "READ"
    assert foreign.status_code == 403
    assert client.patch("/api/notifications/999999/read").status_code == 404


def test_only_admins_create_notifications(client, session):
    target = UserFactory()
    payload = {"userId": target.id, "message": "Welcome aboard", "type": "GENERAL"}

    sign_in(client, UserFactory())
    denied = client.post("/api/notifications", json=payload)
    sign_in(client, AdminFactory())
    created = client.post("/api/notifications", json=payload)
    missing = client.post("/api/notifications", json={**payload, "userId": 999999})

    assert problem_of(denied) == (403, "Admin privileges required")
    assert created.status_code == 201
    assert data_of(created)["userId"] == target.id
    assert missing.status_code == 404


def test_resolving_report_lands_in_reporter_inbox(client, session):
    report = ReportFactory()
    sign_in(client, AdminFactory())
    client.patch(f"/api/admin/reports/{report.id}", json={"status": "IGNORED"})

    sign_in(client, report.reporter)
    inbox = data_of(client.get("/api/notifications"))

    assert inbox[0]["link"]
    assert inbox[0]["status"] == "UNREAD"
