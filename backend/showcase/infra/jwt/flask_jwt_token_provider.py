# showcase/infra/jwt/flask_jwt_token_provider.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from showcase.core.config import SESSION_TTL
from showcase.services._shared.ports import IdentityClaims, TokenProvider

log = logging.getLogger(__name__)


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Adapter for Flask-JWT-Extended (HS256 signed with ``JWT_SECRET_KEY``).

    .. note::
       Requires an active Flask app context with proper JWT settings.
    """

    def issue(self, claims: IdentityClaims, ttl: timedelta = SESSION_TTL) -> str:
        from flask_jwt_extended import create_access_token as _create_access

        # A zero delta is falsy for the library and would mean "no exp".
        expires_delta = ttl if ttl > timedelta(0) else timedelta(seconds=-1)
        return cast(
            str,
            _create_access(
                identity=claims.subject_id,
                additional_claims=claims.to_claims(),
                expires_delta=expires_delta,
            ),
        )

    def verify(self, token: str) -> IdentityClaims | None:
        """
        Decode and validate ``token``.

        Any signature, expiry or shape failure yields ``None``; callers never
        see the underlying reason.
        """
        from flask_jwt_extended import decode_token

        if not token:
            return None
        try:
            payload = cast(dict[str, Any], decode_token(token))
            return IdentityClaims.from_payload(payload)
        except (PyJWTError, JWTExtendedException, ValueError) as exc:
            log.debug("token.rejected: %s", exc.__class__.__name__)
            return None
