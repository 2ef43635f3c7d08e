"""AuthService: registration, login and password change."""

from __future__ import annotations

import logging

import pytest

from showcase.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    RateLimitedError,
    ServiceError,
)
from showcase.services._shared.ports import InMemoryRateLimitStore, StubTokenProvider
from showcase.services.auth.dto import LoginIn, PasswordChangeIn, RegisterIn
from showcase.services.auth.rate_limiter import RateLimiter
from showcase.services.auth.service import INVALID_CREDENTIALS, AuthService
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.auth import context_for


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def tokens() -> StubTokenProvider:
    return StubTokenProvider()


@pytest.fixture()
def service(tokens) -> AuthService:
    """AuthService wired to in-memory doubles."""
    return AuthService(
        token_provider=tokens,
        rate_limiter=RateLimiter(InMemoryRateLimitStore()),
    )


# -------------------------------- Tests ----------------------------------- #
def test_register_creates_user_and_issues_token(service, tokens, session):
    out = service.register(
        RegisterIn(email="New@Example.com", password="longenough", username="newbie")
    )

    assert out.user.email == "new@example.com"
    assert out.user.role == "USER"
    claims = tokens.verify(out.token)
    assert claims is not None
    assert claims.user_id == out.user.id
    assert claims.username == "newbie"


def test_register_duplicate_email_conflicts(service, session):
    UserFactory(email="taken@example.com")

    with pytest.raises(ConflictError) as exc:
        service.register(RegisterIn(email="TAKEN@example.com", password="longenough"))
    assert exc.value.detail == "Email is already registered"


def test_register_duplicate_username_conflicts(service, session):
    UserFactory(username="dup")

    with pytest.raises(ConflictError) as exc:
        service.register(RegisterIn(email="x@example.com", password="longenough", username="dup"))
    assert exc.value.detail == "Username is already taken"


def test_register_short_password_rejected(service, session):
    with pytest.raises(ServiceError):
        service.register(RegisterIn(email="x@example.com", password="short"))


def test_register_rate_limit(service):
    for _ in range(5):
        service.enforce_register_rate("10.1.1.1")

    with pytest.raises(RateLimitedError):
        service.enforce_register_rate("10.1.1.1")


def test_login_issues_token(service, tokens, session):
    user = UserFactory(email="a@example.com", password="Sup3rSecret")

    out = service.login(LoginIn(email="a@example.com", password="Sup3rSecret"))

    assert out.user.id == user.id
    assert tokens.verify(out.token).email == "a@example.com"


@pytest.mark.parametrize(
    ("email", "password"),
    [("a@example.com", "wrong-password"), ("missing@example.com", DEFAULT_PASSWORD)],
)
def test_login_failures_share_one_message(service, session, caplog, email, password):
    UserFactory(email="a@example.com")

    with caplog.at_level(logging.INFO), pytest.raises(AuthenticationError) as exc:
        service.login(LoginIn(email=email, password=password))

    assert str(exc.value) == INVALID_CREDENTIALS
    assert "auth.login_failed" in caplog.text


def test_change_password(tokens, session):
    user = UserFactory(password="OldPassw0rd")
    service = AuthService(token_provider=tokens, ctx=context_for(user))

    service.change_password(
        PasswordChangeIn(current_password="OldPassw0rd", new_password="NewPassw0rd")
    )

    assert user.verify_password("NewPassw0rd")


def test_change_password_requires_current(tokens, session):
    user = UserFactory(password="OldPassw0rd")
    service = AuthService(token_provider=tokens, ctx=context_for(user))

    with pytest.raises(ServiceError):
        service.change_password(
            PasswordChangeIn(current_password="nope-nope", new_password="NewPassw0rd")
        )


def test_change_password_requires_session(service):
    with pytest.raises(AuthenticationError):
        service.change_password(PasswordChangeIn(current_password="a", new_password="b" * 8))
