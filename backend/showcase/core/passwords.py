"""Credential hashing helpers backed by :mod:`werkzeug.security`."""

from __future__ import annotations

import logging

from werkzeug.security import check_password_hash, generate_password_hash

log = logging.getLogger(__name__)


def hash_password(plaintext: str) -> str:
    """
    Hash a plaintext password with a random salt.

    :param plaintext: Raw password supplied by the user.
    :type plaintext: str
    :returns: Encoded hash (method, salt and digest).
    :rtype: str
    :raises ValueError: If ``plaintext`` is empty or not a string.
    """
    if not isinstance(plaintext, str) or not plaintext:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(plaintext)


def verify_password(plaintext: str, hashed: str) -> bool:
    """
    Check ``plaintext`` against a stored hash.

    A mismatch returns ``False``. A stored value that is not a recognizable
    hash is a data integrity problem and raises instead of being treated as
    a failed login.

    :param plaintext: Candidate password.
    :type plaintext: str
    :param hashed: Value previously produced by :func:`hash_password`.
    :type hashed: str
    :returns: ``True`` when the password matches.
    :rtype: bool
    :raises ValueError: If ``hashed`` is empty or malformed.
    """
    if not isinstance(plaintext, str):
        return False
    if not hashed or "$" not in hashed:
        log.error("passwords.malformed_hash")
        raise ValueError("Stored password hash is malformed.")
    try:
        return bool(check_password_hash(hashed, plaintext))
    except (ValueError, TypeError) as exc:
        log.error("passwords.malformed_hash", exc_info=True)
        raise ValueError("Stored password hash is malformed.") from exc
