"""
showcase.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider` and the :class:`~.IdentityClaims` value
    object carried inside session tokens.

- :mod:`rate_limit_store`:
    Defines :class:`~.RateLimitStore` and the process-local
    :class:`~.InMemoryRateLimitStore`.

- :mod:`blob_storage`:
    Defines :class:`~.BlobStorage` for deleting uploaded media assets.

Concrete adapters (Flask-JWT-Extended, Redis, storage) live under
``showcase.infra``.
"""

from __future__ import annotations

from .blob_storage import BlobStorage, InMemoryBlobStorage
from .rate_limit_store import InMemoryRateLimitStore, RateLimitStore
from .token_provider import IdentityClaims, StubTokenProvider, TokenProvider

__all__ = [
    "BlobStorage",
    "IdentityClaims",
    "InMemoryBlobStorage",
    "InMemoryRateLimitStore",
    "RateLimitStore",
    "StubTokenProvider",
    "TokenProvider",
]
