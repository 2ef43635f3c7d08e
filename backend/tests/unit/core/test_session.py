"""Session cookie manager, identity resolver and access guard."""

from __future__ import annotations

from datetime import timedelta

import pytest
from flask import Flask, g, jsonify

from showcase.api.deps import ADMIN_REQUIRED, AUTH_REQUIRED, require_auth
from showcase.api.session import (
    IdentityResolver,
    RequestCookieSource,
    SessionCookieManager,
    get_identity_resolver,
)
from showcase.core.errors import Forbidden, Unauthorized
from showcase.services._shared.ports import IdentityClaims, StubTokenProvider

USER = IdentityClaims(subject_id="1", email="u@example.com", role="USER")
ADMIN = IdentityClaims(subject_id="2", email="a@example.com", role="ADMIN")


class DictCookies:
    def __init__(self, **cookies: str) -> None:
        self.cookies = cookies

    def get_cookie(self, name: str) -> str | None:
        return self.cookies.get(name)


@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def resolver(tokens) -> IdentityResolver:
    return IdentityResolver(tokens, SessionCookieManager())


def _set_cookie_header(app: Flask, token: str) -> str:
    with app.test_request_context():
        response = jsonify({})
        SessionCookieManager().set(response, token)
        return response.headers["Set-Cookie"]


def test_cookie_attributes(app):
    header = _set_cookie_header(app, "abc")

    assert header.startswith("token=abc")
    assert "HttpOnly" in header
    assert "Max-Age=604800" in header
    assert "Path=/" in header
    assert "SameSite=Lax" in header
    assert "Secure" not in header


def test_cookie_is_secure_in_production(app, monkeypatch):
    monkeypatch.setitem(app.config, "JWT_COOKIE_SECURE", True)

    assert "Secure" in _set_cookie_header(app, "abc")


def test_clear_expires_cookie(app):
    with app.test_request_context():
        response = jsonify({})
        SessionCookieManager().clear(response)
        header = response.headers["Set-Cookie"]

    assert header.startswith("token=;")
    assert "Max-Age=0" in header or "Expires=Thu, 01 Jan 1970" in header


def test_resolve_from_explicit_source(resolver, tokens):
    token = tokens.issue(USER)

    assert resolver.resolve(DictCookies(token=token)) == USER


def test_resolve_from_explicit_request(app, resolver, tokens):
    token = tokens.issue(USER)
    with app.test_request_context(headers={"Cookie": f"token={token}"}):
        from flask import request

        assert resolver.resolve(request._get_current_object()) == USER
        assert resolver.resolve(RequestCookieSource(request._get_current_object())) == USER


def test_resolve_from_ambient_request(app, resolver, tokens):
    token = tokens.issue(ADMIN)
    with app.test_request_context(headers={"Cookie": f"token={token}"}):
        assert resolver.resolve() == ADMIN


def test_resolve_outside_request_is_anonymous(resolver):
    assert resolver.resolve() is None


@pytest.mark.parametrize("cookies", [{}, {"token": ""}, {"token": "forged"}])
def test_absent_or_invalid_cookie_is_anonymous(resolver, cookies):
    assert resolver.resolve(DictCookies(**cookies)) is None


def test_expired_token_is_anonymous(resolver, tokens):
    token = tokens.issue(USER, ttl=timedelta(0))

    assert resolver.resolve(DictCookies(token=token)) is None


# ------------------------------ Access guard -------------------------------


@pytest.fixture()
def stub_resolver(app, tokens, monkeypatch):
    resolver = IdentityResolver(tokens, SessionCookieManager())
    monkeypatch.setitem(app.extensions, "identity_resolver", resolver)
    return resolver


def _call_guarded(app, token: str | None, *, admin_only: bool):
    calls = []

    @require_auth(admin_only=admin_only)
    def handler():
        calls.append(g.identity)
        return "ok"

    headers = {"Cookie": f"token={token}"} if token else {}
    with app.test_request_context(headers=headers):
        result = handler()
    return result, calls


def test_guard_rejects_anonymous(app, stub_resolver):
    with pytest.raises(Unauthorized) as exc:
        _call_guarded(app, None, admin_only=False)

    assert exc.value.message == AUTH_REQUIRED


def test_guard_admin_gate_refuses_user(app, stub_resolver, tokens):
    token = tokens.issue(USER)

    with pytest.raises(Forbidden) as exc:
        _call_guarded(app, token, admin_only=True)

    assert exc.value.message == ADMIN_REQUIRED


def test_guard_admin_gate_calls_handler_for_admin(app, stub_resolver, tokens):
    result, calls = _call_guarded(app, tokens.issue(ADMIN), admin_only=True)

    assert result == "ok"
    assert calls == [ADMIN]


def test_guard_bare_form_exposes_identity(app, stub_resolver, tokens):
    calls = []

    @require_auth
    def handler():
        calls.append(g.identity)
        return "ok"

    with app.test_request_context(headers={"Cookie": f"token={tokens.issue(USER)}"}):
        assert handler() == "ok"

    assert calls == [USER]


def test_default_resolver_is_installed(app):
    assert isinstance(get_identity_resolver(), IdentityResolver)
