"""
auth/permissions.py -- Advisory permission store and the owner-only grant.

The store maps user id -> list of permission strings. It is process-local and
resets on restart; nothing in AuthGate enforces its contents, it is only
reported back by /api/verify for consuming apps to interpret.

One PermissionStore is created per app in the lifespan and hung on
app.state.permissions. Routes receive it from there, tests build their own.
Every write is a single dict assignment, so concurrent requests need no lock.

Layer rule: no imports from api/ or web/.
"""

from __future__ import annotations

import logging
from typing import Any

from auth.errors import AuthorizationFailure
from core.config import DEFAULT_PERMISSIONS, OWNER_ROLE

logger = logging.getLogger("authgate.auth")


class PermissionStore:
    def __init__(self, initial: dict[str, list[str]] | None = None) -> None:
        self._permissions: dict[str, list[str]] = dict(initial or {})

    def get(self, user_id: str) -> list[str]:
        """Return the user's permissions, or the default list when none were granted."""
        granted = self._permissions.get(user_id)
        if granted is None:
            return list(DEFAULT_PERMISSIONS)
        return list(granted)

    def set(self, user_id: str, permissions: list[str]) -> None:
        """Replace the user's permissions."""
        self._permissions[user_id] = list(permissions)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._permissions

    def __len__(self) -> int:
        return len(self._permissions)


def grant(acting_claims: dict[str, Any], target_user_id: str, permissions: list[str], store: PermissionStore) -> None:
    """Overwrite target_user_id's permissions on behalf of acting_claims.

    Raises AuthorizationFailure, leaving the store untouched, unless the
    acting identity holds the owner role.
    """
    if acting_claims.get("role") != OWNER_ROLE:
        raise AuthorizationFailure()
    store.set(target_user_id, permissions)
    logger.info("Permissions for %r set to %s", target_user_id, permissions)
