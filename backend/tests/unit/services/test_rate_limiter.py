"""Registration limiter over a fixed window."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from showcase.services._shared.ports import InMemoryRateLimitStore
from showcase.services.auth.rate_limiter import RateLimitDecision, RateLimiter

T0 = datetime(2026, 5, 1, 9, 0, tzinfo=timezone.utc)


class Clock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock() -> Clock:
    return Clock(T0)


@pytest.fixture()
def limiter(clock) -> RateLimiter:
    return RateLimiter(InMemoryRateLimitStore(), clock=clock)


def test_five_attempts_allowed_sixth_limited(limiter):
    decisions = [limiter.check("10.0.0.1") for _ in range(6)]

    assert decisions[:5] == [RateLimitDecision.ALLOWED] * 5
    assert decisions[5] is RateLimitDecision.LIMITED


def test_limited_attempts_still_count(limiter, clock):
    for _ in range(7):
        limiter.check("10.0.0.1")

    clock.now = T0 + timedelta(minutes=4)
    assert limiter.check("10.0.0.1") is RateLimitDecision.LIMITED


def test_window_boundary_is_strict(limiter, clock):
    for _ in range(6):
        limiter.check("10.0.0.1")

    clock.now = T0 + timedelta(minutes=5)
    assert limiter.check("10.0.0.1") is RateLimitDecision.LIMITED

    clock.now = T0 + timedelta(minutes=5, seconds=1)
    assert limiter.check("10.0.0.1") is RateLimitDecision.ALLOWED


def test_clients_are_limited_independently(limiter):
    for _ in range(6):
        limiter.check("10.0.0.1")

    assert limiter.check("10.0.0.2") is RateLimitDecision.ALLOWED


def test_missing_key_falls_back_to_unknown(limiter):
    for _ in range(5):
        limiter.check(None)

    assert limiter.check("") is RateLimitDecision.LIMITED
    assert limiter.check("unknown") is RateLimitDecision.LIMITED


def test_limited_attempt_is_logged(limiter, caplog):
    for _ in range(6):
        limiter.check("10.0.0.9")

    assert "ratelimit.limited" in caplog.text


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [({"limit": 0}, "limit"), ({"window": timedelta(0)}, "window")],
)
def test_invalid_settings_are_rejected(kwargs, message):
    with pytest.raises(ValueError, match=message):
        RateLimiter(InMemoryRateLimitStore(), **kwargs)
