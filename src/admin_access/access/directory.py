"""Access – AdminDirectory, the in-memory set of admin accounts."""
from __future__ import annotations

import threading
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from admin_access.access.identity import AdminUser
from admin_access.kernel.errors import ConflictError
from admin_access.observability.logging import get_logger

_log = get_logger(__name__)


class AdminDirectory:
    """Copy-on-write mapping of admin id to :class:`AdminUser`.

    Same publication contract as :class:`RoleRegistry`: lock-free reads,
    serialised writers that swap in a new read-only mapping.
    """

    def __init__(self, admins: Iterable[AdminUser] = ()) -> None:
        self._lock = threading.Lock()
        self._admins: Mapping[str, AdminUser] = MappingProxyType({a.id: a for a in admins})

    def list(self) -> tuple[AdminUser, ...]:
        return tuple(self._admins.values())

    def find(self, admin_id: object) -> AdminUser | None:
        if not isinstance(admin_id, str):
            return None
        return self._admins.get(admin_id)

    def first(self) -> AdminUser | None:
        return next(iter(self._admins.values()), None)

    def count_by_role(self, role_id: str) -> int:
        """Number of admins currently assigned to *role_id*."""
        return sum(1 for a in self._admins.values() if a.role == role_id)

    def __len__(self) -> int:
        return len(self._admins)

    def upsert(self, admin: AdminUser) -> AdminUser:
        with self._lock:
            updated = dict(self._admins)
            updated[admin.id] = admin
            self._admins = MappingProxyType(updated)
        _log.debug("directory.upserted", admin_id=admin.id, role=admin.role)
        return admin

    def update(self, admin_id: str, change: Callable[[AdminUser], AdminUser]) -> AdminUser | None:
        """Apply *change* to the stored admin under the writer lock.

        Returns the new record, or ``None`` if *admin_id* is unknown.
        """
        with self._lock:
            current = self._admins.get(admin_id)
            if current is None:
                return None
            admin = change(current)
            if admin.id != admin_id:
                raise ConflictError(f"Cannot change admin id '{admin_id}' to '{admin.id}'")
            updated = dict(self._admins)
            updated[admin_id] = admin
            self._admins = MappingProxyType(updated)
        _log.debug("directory.updated", admin_id=admin_id, role=admin.role)
        return admin

    def remove(self, admin_id: str) -> AdminUser | None:
        with self._lock:
            if admin_id not in self._admins:
                return None
            updated = dict(self._admins)
            removed = updated.pop(admin_id)
            self._admins = MappingProxyType(updated)
        _log.debug("directory.removed", admin_id=admin_id)
        return removed


__all__ = ["AdminDirectory"]
