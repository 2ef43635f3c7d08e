"""Session cookie handling and identity resolution.

The session token travels in a single HttpOnly cookie. Reading that cookie
and verifying the token happens only here: handlers and guards obtain the
caller's identity through :class:`IdentityResolver` and never parse cookies
or check signatures themselves.
"""

from __future__ import annotations

from typing import Protocol, cast

from flask import Flask, Response, current_app, g, has_request_context, request
from flask_jwt_extended import set_access_cookies, unset_access_cookies
from werkzeug.wrappers import Request

from showcase.core.config import SESSION_TTL
from showcase.services._shared.ports.token_provider import IdentityClaims, TokenProvider

IDENTITY_RESOLVER_KEY = "identity_resolver"
DEFAULT_COOKIE_NAME = "token"


class CookieSource(Protocol):
    """Anything that can look up a cookie value by name."""

    def get_cookie(self, name: str) -> str | None: ...


class RequestCookieSource:
    """Cookies of an explicitly passed request object."""

    def __init__(self, req: Request) -> None:
        self._request = req

    def get_cookie(self, name: str) -> str | None:
        return self._request.cookies.get(name)


class AmbientCookieSource:
    """Cookies of the request bound to the current Flask context."""

    def get_cookie(self, name: str) -> str | None:
        if not has_request_context():
            return None
        return request.cookies.get(name)


class SessionCookieManager:
    """
    Write, clear and read the session cookie.

    Attributes come from the flask-jwt-extended settings: HttpOnly always,
    ``Secure`` from ``JWT_COOKIE_SECURE``, ``SameSite`` from
    ``JWT_COOKIE_SAMESITE`` and path ``/``. ``Max-Age`` is the session TTL.
    """

    def __init__(self, *, max_age: int = int(SESSION_TTL.total_seconds())) -> None:
        self.max_age = max_age

    @staticmethod
    def cookie_name() -> str:
        return str(current_app.config.get("JWT_ACCESS_COOKIE_NAME", DEFAULT_COOKIE_NAME))

    def set(self, response: Response, token: str) -> Response:
        set_access_cookies(response, token, max_age=self.max_age)
        return response

    def clear(self, response: Response) -> Response:
        """Expire the cookie. Safe to call when no cookie is present."""
        unset_access_cookies(response)
        return response

    def read(self, source: CookieSource) -> str | None:
        value = source.get_cookie(self.cookie_name())
        return value or None


class IdentityResolver:
    """
    Turn a request's session cookie into :class:`IdentityClaims`.

    :param tokens: Token verifier.
    :param cookies: Cookie manager used to read the raw token.
    """

    def __init__(self, tokens: TokenProvider, cookies: SessionCookieManager) -> None:
        self.tokens = tokens
        self.cookies = cookies

    def resolve(self, source: Request | CookieSource | None = None) -> IdentityClaims | None:
        """
        Return the caller's identity, or ``None`` when absent or invalid.

        :param source: An explicit request, a cookie source, or ``None`` for
            the ambient request context.
        """
        if source is None:
            cookie_source: CookieSource = AmbientCookieSource()
        elif isinstance(source, Request):
            cookie_source = RequestCookieSource(source)
        else:
            cookie_source = source

        token = self.cookies.read(cookie_source)
        if not token:
            return None
        return self.tokens.verify(token)


def get_identity_resolver() -> IdentityResolver:
    return cast(IdentityResolver, current_app.extensions[IDENTITY_RESOLVER_KEY])


def get_cookie_manager() -> SessionCookieManager:
    return get_identity_resolver().cookies


def get_token_provider() -> TokenProvider:
    return get_identity_resolver().tokens


def init_app(app: Flask) -> None:
    """Install the default resolver (JWT provider + cookie manager)."""
    from showcase.infra.jwt.flask_jwt_token_provider import JWTTokenProvider

    app.extensions.setdefault(
        IDENTITY_RESOLVER_KEY, IdentityResolver(JWTTokenProvider(), SessionCookieManager())
    )
    app.before_request(_forget_identity)


def _forget_identity() -> None:
    # ``g`` outlives a request when an app context is already active.
    g.pop("identity", None)
