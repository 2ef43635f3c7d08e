"""Authorization predicates shared by every service.

Pure functions over ids and roles; no I/O and no logging. Services combine
them through :meth:`BaseService.ensure_can_access` which audits overrides.
"""

from __future__ import annotations

ADMIN_ROLE = "ADMIN"


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource (ids compared as strings)."""
    if actor_id is None or owner_id is None:
        return False
    return str(actor_id) == str(owner_id)


def is_admin(role) -> bool:
    """Return True for the ADMIN role (enum member or plain string)."""
    value = getattr(role, "value", role)
    return str(value) == ADMIN_ROLE


def can_access(*, actor_id, role, owner_id) -> bool:
    """Owners always; admins through the override capability."""
    return is_owner(actor_id=actor_id, owner_id=owner_id) or is_admin(role)
