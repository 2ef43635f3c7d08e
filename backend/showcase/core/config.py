"""Application settings with environment-based simple classes."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv
from flask import Flask

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Signing key used when ``JWT_SECRET`` is unset outside production.
DEV_JWT_SECRET: Final[str] = "dev-insecure-jwt-secret"

SESSION_TTL: Final[timedelta] = timedelta(days=7)

log = logging.getLogger(__name__)

# Load .env in development (no-op when missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_int(name: str, default: int) -> int:
    """Parse an integer from an environment variable, falling back to ``default``."""
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return int(val)


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    APP_ENV: str
        Environment name, mirrored from the selecting class.
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str | None
        Key used by ``flask-jwt-extended`` for signing session tokens. Read
        from ``JWT_SECRET``; development builds fall back to
        :data:`DEV_JWT_SECRET` and log a warning at startup.
    JWT_TOKEN_LOCATION: list[str]
        Session tokens travel only in cookies.
    JWT_ACCESS_COOKIE_NAME: str
        Cookie carrying the session token (``token``).
    JWT_COOKIE_SECURE: bool
        Emit the ``Secure`` cookie attribute. Enabled in production.
    JWT_COOKIE_SAMESITE: str
        ``SameSite`` attribute of the session cookie.
    JWT_ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Session token lifetime (7 days).
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    REDIS_URL: str | None
        Optional Redis location. When set, rate limiting state is shared
        across processes.
    REGISTER_RATE_LIMIT: int
        Registration attempts allowed per window and client address.
    REGISTER_RATE_WINDOW_SECONDS: int
        Length of the registration rate-limit window.
    MAX_MEDIA_PER_PROJECT: int
        Upper bound of media items attached to a single project.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    APP_ENV = "development"
    API_BASE_PREFIX = "/api"

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY: str | None = os.getenv("JWT_SECRET") or DEV_JWT_SECRET

    # Session cookie (flask-jwt-extended)
    JWT_TOKEN_LOCATION = ["cookies"]
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_COOKIE_SECURE = False
    JWT_COOKIE_SAMESITE = "Lax"
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_SESSION_COOKIE = False
    JWT_ACCESS_TOKEN_EXPIRES = SESSION_TTL

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Shared state
    REDIS_URL = os.getenv("REDIS_URL")
    REGISTER_RATE_LIMIT = env_int("REGISTER_RATE_LIMIT", 5)
    REGISTER_RATE_WINDOW_SECONDS = env_int("REGISTER_RATE_WINDOW_SECONDS", 300)

    # Domain limits
    MAX_MEDIA_PER_PROJECT = env_int("MAX_MEDIA_PER_PROJECT", 10)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Never talks to Redis; rate limiting stays in process.
    """

    APP_ENV = "testing"
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    REDIS_URL = None
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    ``JWT_SECRET_KEY`` has no fallback here: :func:`validate_config` refuses
    to start the application when ``JWT_SECRET`` is missing.
    """

    APP_ENV = "production"
    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False
    JWT_SECRET_KEY = os.getenv("JWT_SECRET") or None
    JWT_COOKIE_SECURE = True


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_config(app: Flask) -> None:
    """Check security-relevant settings once the config is loaded.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``config`` is inspected.

    Raises
    ------
    RuntimeError
        When the application runs in production without a signing secret, or
        with the development fallback secret.
    """
    config: Mapping[str, Any] = app.config
    secret = config.get("JWT_SECRET_KEY")
    is_production = str(config.get("APP_ENV", "")).lower() == "production"

    if is_production:
        if not secret or secret == DEV_JWT_SECRET:
            raise RuntimeError(
                "JWT_SECRET must be set to a strong value when APP_ENV=production."
            )
        return

    if not secret:
        app.config["JWT_SECRET_KEY"] = DEV_JWT_SECRET
        secret = DEV_JWT_SECRET
    if secret == DEV_JWT_SECRET:
        log.warning(
            "JWT_SECRET is not set; using the insecure development secret (env=%s).",
            config.get("APP_ENV"),
        )
