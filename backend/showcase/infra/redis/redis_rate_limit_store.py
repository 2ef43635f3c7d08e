from datetime import datetime, timedelta
from typing import cast

import redis  # type: ignore[import-untyped]


class RedisRateLimitStore:
    """
    Fixed-window counter shared across workers.

    ``INCR`` is atomic; the first hit of a window sets the key TTL, so Redis
    expires idle windows on its own.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "rl"):
        self.r = r
        self.prefix = prefix

    def _k(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def hit(self, key: str, *, window: timedelta, now: datetime) -> int:
        k = self._k(key)
        ttl_ms = max(1, int(window.total_seconds() * 1000))
        pipe = self.r.pipeline()
        pipe.incr(k)
        pipe.pttl(k)
        count, pttl = pipe.execute()
        # -1: key has no expiry yet (first hit, or a crash between calls)
        if cast(int, count) == 1 or cast(int, pttl) == -1:
            self.r.pexpire(k, ttl_ms)
        return cast(int, count)

    def reset(self, key: str) -> None:
        self.r.delete(self._k(key))
