"""HTTP flows for registration, login and the session cookie."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from showcase.models.user import User
from tests.factories.user import UserFactory
from tests.helpers.auth import sign_in
from tests.helpers.http import data_of, problem_of

REGISTER = "/api/auth/register"
LOGIN = "/api/auth/login"


def _session_cookie(resp) -> str | None:
    for header in resp.headers.getlist("Set-Cookie"):
        if header.startswith("token="):
            return header
    return None


def test_register_sets_cookie_and_creates_user(client, session):
    resp = client.post(
        REGISTER,
        json={"email": "new@example.com", "password": "longenough", "firstName": "New"},
    )

    assert resp.status_code == 201
    user = data_of(resp)["user"]
    assert user["email"] == "new@example.com"
    assert user["firstName"] == "New"
    assert "password" not in user
    cookie = _session_cookie(resp)
    assert cookie and "HttpOnly" in cookie and "Max-Age=604800" in cookie

    me = client.get("/api/auth/user")
    assert data_of(me)["authenticated"] is True
    assert data_of(me)["user"]["email"] == "new@example.com"


def test_register_conflicts(client, session):
    UserFactory(email="dup@example.com", username="dupe")

    by_email = client.post(REGISTER, json={"email": "dup@example.com", "password": "longenough"})
    by_name = client.post(
        REGISTER, json={"email": "other@example.com", "password": "longenough", "username": "dupe"}
    )

    assert problem_of(by_email) == (409, "Email is already registered")
    assert problem_of(by_name) == (409, "Username is already taken")


def test_register_validation_error(client, session):
    resp = client.post(REGISTER, json={"email": "not-an-email", "password": "short"})

    assert resp.status_code == 400
    body = resp.get_json()
    assert body["code"] == "validation_error"
    assert set(body["details"]["errors"]) == {"email", "password"}
    assert body["request_id"]


def test_register_is_rate_limited_on_sixth_attempt(client, session):
    statuses = [
        client.post(REGISTER, json={"email": f"r{i}@example.com", "password": "longenough"})
        .status_code
        for i in range(6)
    ]

    assert statuses == [201] * 5 + [429]
    assert session.query(User).filter_by(email="r5@example.com").first() is None


def test_invalid_register_payloads_still_count(client, session):
    for _ in range(5):
        client.post(REGISTER, json={})

    resp = client.post(REGISTER, json={"email": "late@example.com", "password": "longenough"})

    assert resp.status_code == 429


def test_login_success_sets_cookie(client, session):
    UserFactory(email="ada@example.com", password="Sup3rSecret")

    resp = client.post(LOGIN, json={"email": "ada@example.com", "password": "Sup3rSecret"})

    assert resp.status_code == 200
    assert data_of(resp)["user"]["email"] == "ada@example.com"
    cookie = _session_cookie(resp)
    assert cookie is not None
    assert "SameSite=Lax" in cookie
    assert "Path=/" in cookie


def test_login_failure_is_uniform_and_sets_no_cookie(client, session):
    UserFactory(email="ada@example.com", password="Sup3rSecret")

    wrong = client.post(LOGIN, json={"email": "ada@example.com", "password": "nope-nope"})
    unknown = client.post(LOGIN, json={"email": "ghost@example.com", "password": "Sup3rSecret"})

    assert problem_of(wrong) == (401, "Invalid email or password")
    assert problem_of(unknown) == problem_of(wrong)
    assert _session_cookie(wrong) is None
    assert _session_cookie(unknown) is None


def test_login_missing_fields_is_400(client, session):
    resp = client.post(LOGIN, json={"email": "ada@example.com"})

    assert resp.status_code == 400


def test_logout_clears_cookie(client, session):
    sign_in(client, UserFactory())

    resp = client.post("/api/auth/logout")

    assert resp.status_code == 200
    assert _session_cookie(resp).startswith("token=;")
    assert data_of(client.get("/api/auth/user")) == {"authenticated": False, "user": None}


def test_session_user_reports_anonymous(client):
    resp = client.get("/api/auth/user")

    assert resp.status_code == 200
    assert data_of(resp) == {"authenticated": False, "user": None}


def test_forged_cookie_is_anonymous(client, session):
    client.set_cookie("token", "not.a.jwt")

    assert data_of(client.get("/api/auth/user"))["authenticated"] is False
    assert client.get("/api/auth/profile").status_code == 401


def test_profile_requires_session(client):
    resp = client.get("/api/auth/profile")

    assert problem_of(resp) == (401, "Authentication required")


def test_profile_round_trip(client, session):
    user = UserFactory()
    sign_in(client, user)

    resp = client.put("/api/auth/profile", json={"bio": "Builder", "github": "octo"})

    assert resp.status_code == 200
    assert data_of(resp)["bio"] == "Builder"
    assert data_of(client.get("/api/auth/profile"))["github"] == "octo"


def test_profile_email_taken_is_400(client, session):
    UserFactory(email="taken@example.com")
    sign_in(client, UserFactory())

    resp = client.put("/api/auth/profile", json={"email": "taken@example.com"})

    assert resp.status_code == 400


def test_username_change_rules(client, session):
    user = UserFactory(username="before")
    UserFactory(username="taken")
    sign_in(client, user)

    bad = client.put("/api/auth/profile/username", json={"username": "No Spaces"})
    taken = client.put("/api/auth/profile/username", json={"username": "taken"})
    same = client.put("/api/auth/profile/username", json={"username": "before"})
    ok = client.put("/api/auth/profile/username", json={"username": "after"})
    again = client.put("/api/auth/profile/username", json={"username": "again"})

    assert bad.status_code == 400
    assert taken.status_code == 409
    assert data_of(same) == {"username": "before", "changed": False}
    assert data_of(ok) == {"username": "after", "changed": True}
    assert again.status_code == 429


def test_username_change_allowed_after_a_year(client, session):
    user = UserFactory(
        username="before", username_last_changed=datetime.now(UTC) - timedelta(days=400)
    )
    sign_in(client, user)

    resp = client.put("/api/auth/profile/username", json={"username": "after"})

    assert data_of(resp)["changed"] is True


def test_change_password_clears_cookie(client, session):
    user = UserFactory(password="OldPassw0rd")
    sign_in(client, user)

    wrong = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "bad-guess", "newPassword": "NewPassw0rd"},
    )
    short = client.post(
        "/api/auth/change-password", json={"currentPassword": "OldPassw0rd", "newPassword": "x"}
    )
    ok = client.post(
        "/api/auth/change-password",
        json={"currentPassword": "OldPassw0rd", "newPassword": "NewPassw0rd"},
    )

    assert wrong.status_code == 400
    assert short.status_code == 400
    assert ok.status_code == 200
    assert _session_cookie(ok).startswith("token=;")
    login = client.post(LOGIN, json={"email": user.email, "password": "NewPassw0rd"})
    assert login.status_code == 200


def test_health(client, session):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert data_of(resp)["db"] == "ok"
    assert resp.headers["X-Request-ID"]
