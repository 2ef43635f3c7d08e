"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
redis_client: redis.Redis | None = None

RATE_LIMIT_STORE_KEY = "rate_limit_store"
BLOB_STORAGE_KEY = "blob_storage"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the shared-state backends.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`showcase.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The rate-limit store and the blob storage adapter are published through
    ``app.extensions`` so request handlers and tests resolve them in a single
    place. Tests may replace either entry after the app is built.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from showcase import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    _init_redis(app)
    _init_rate_limit_store(app)
    _init_blob_storage(app)


def _init_redis(app: Flask) -> None:
    """Connect to Redis when ``REDIS_URL`` is configured.

    :raises RuntimeError: When the server cannot be reached.
    """
    global redis_client
    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        redis_client = None
        app.extensions.pop("redis_client", None)
        return

    redis_client = redis.Redis.from_url(redis_url)
    try:
        redis_client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc
    app.extensions["redis_client"] = redis_client


def _init_rate_limit_store(app: Flask) -> None:
    """Pick the shared Redis store when available, else the in-process one."""
    from showcase.infra.redis.redis_rate_limit_store import RedisRateLimitStore
    from showcase.services._shared.ports import InMemoryRateLimitStore

    if redis_client is not None:
        app.extensions[RATE_LIMIT_STORE_KEY] = RedisRateLimitStore(r=redis_client)
    else:
        app.extensions[RATE_LIMIT_STORE_KEY] = InMemoryRateLimitStore()


def _init_blob_storage(app: Flask) -> None:
    """Install the default blob storage adapter (log-only)."""
    from showcase.infra.storage.logging_blob_storage import LoggingBlobStorage

    app.extensions.setdefault(BLOB_STORAGE_KEY, LoggingBlobStorage())


def get_redis() -> redis.Redis:
    """Return the initialized Redis client."""
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized. Call init_app() first.")
    return redis_client
