"""WSGI proxy middleware configuration helper."""

from __future__ import annotations

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix


def init_app(app: Flask) -> None:
    """Trust one reverse-proxy hop for ``X-Forwarded-*`` headers.

    The registration rate limiter keys on ``request.remote_addr``; behind a
    proxy that value is only the client address once :class:`ProxyFix`
    rewrites it from ``X-Forwarded-For``. Disable with ``USE_PROXYFIX=0``
    when the app is exposed directly, otherwise clients could spoof the
    header and dodge the limit.
    """
    if app.config.get("USE_PROXYFIX", True):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)
