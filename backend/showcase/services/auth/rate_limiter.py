"""Fixed-window attempt limiter for unauthenticated endpoints."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum

from showcase.models.base import utcnow
from showcase.services._shared.ports.rate_limit_store import RateLimitStore

log = logging.getLogger(__name__)

DEFAULT_LIMIT = 5
DEFAULT_WINDOW = timedelta(minutes=5)


class RateLimitDecision(str, Enum):
    ALLOWED = "ALLOWED"
    LIMITED = "LIMITED"


class RateLimiter:
    """
    Count attempts per client key inside a fixed window.

    Every call is recorded, limited ones included. A caller is limited once
    its count inside the window exceeds ``limit``; the window restarts when
    more than ``window`` has elapsed since its first attempt.

    :param store: Shared counter backend (in-memory or Redis).
    :param limit: Attempts allowed per window.
    :param window: Window length.
    :param clock: Time source, injectable for tests.
    :param scope: Key namespace so several limiters can share a store.
    """

    def __init__(
        self,
        store: RateLimitStore,
        *,
        limit: int = DEFAULT_LIMIT,
        window: timedelta = DEFAULT_WINDOW,
        clock: Callable[[], datetime] = utcnow,
        scope: str = "register",
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window <= timedelta(0):
            raise ValueError("window must be positive")
        self.store = store
        self.limit = limit
        self.window = window
        self.clock = clock
        self.scope = scope

    def check(self, key: str | None) -> RateLimitDecision:
        client_key = key or "unknown"
        count = self.store.hit(f"{self.scope}:{client_key}", window=self.window, now=self.clock())
        if count > self.limit:
            log.warning(
                "ratelimit.limited",
                extra={"client_key": client_key, "action": self.scope},
            )
            return RateLimitDecision.LIMITED
        return RateLimitDecision.ALLOWED
