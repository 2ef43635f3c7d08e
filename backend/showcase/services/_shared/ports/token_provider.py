from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import timedelta
from typing import Any, Protocol

from showcase.core.config import SESSION_TTL


@dataclass(frozen=True, slots=True)
class IdentityClaims:
    """
    Identity snapshot embedded in a session token.

    Claims are frozen at issue time. A profile change made after login
    becomes visible only once a new token is issued (next login). An ADMIN
    role claim is re-checked against the stored role on every request.

    :ivar subject_id: User id as a string (JWT ``sub``).
    :ivar email: Normalized email.
    :ivar role: ``USER`` or ``ADMIN``.
    :ivar username: Public handle, if chosen.
    :ivar first_name: Optional display name.
    :ivar last_name: Optional display name.
    """

    subject_id: str
    email: str
    role: str
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None

    @property
    def user_id(self) -> int:
        return int(self.subject_id)

    @property
    def is_admin(self) -> bool:
        return self.role == "ADMIN"

    def to_claims(self) -> dict[str, Any]:
        """Return the non-``sub`` claims in their wire (camelCase) form."""
        return {
            "email": self.email,
            "role": self.role,
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> IdentityClaims:
        """
        Build claims from a decoded token payload.

        :raises ValueError: If ``sub``, ``email`` or ``role`` is missing.
        """
        sub = payload.get("sub")
        email = payload.get("email")
        role = payload.get("role")
        if sub in (None, "") or not email or not role:
            raise ValueError("Token payload lacks identity claims.")
        return cls(
            subject_id=str(sub),
            email=str(email),
            role=str(role),
            username=payload.get("username"),
            first_name=payload.get("firstName"),
            last_name=payload.get("lastName"),
        )


class TokenProvider(Protocol):
    """Port for issuing and verifying session tokens."""

    def issue(self, claims: IdentityClaims, ttl: timedelta = SESSION_TTL) -> str: ...

    def verify(self, token: str) -> IdentityClaims | None: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests. No signing."""

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, IdentityClaims] = {}
        self.revoked: set[str] = set()

    def issue(self, claims: IdentityClaims, ttl: timedelta = SESSION_TTL) -> str:
        self._seq += 1
        token = f"stub.{claims.subject_id}.{self._seq}"
        self._issued[token] = claims
        if ttl <= timedelta(0):
            self.revoked.add(token)
        return token

    def verify(self, token: str) -> IdentityClaims | None:
        if token in self.revoked:
            return None
        claims = self._issued.get(token)
        return IdentityClaims(**asdict(claims)) if claims else None
