"""Access – Permission and PermissionCatalog.

The catalog is an ordered, append-only registry of :class:`Permission`
entries. Insertion order is the display order; ids are the durable key.
"""

from __future__ import annotations

import dataclasses
import threading
from typing import Iterable, Iterator, Sequence

from admin_access.kernel.errors import ConflictError, ValidationError
from admin_access.kernel.types import PermissionId
from admin_access.observability.logging import get_logger

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class Permission:
    """An atomic, named capability (e.g. ``jobs.delete``)."""

    id: str
    name: str
    description: str
    category: str

    def __str__(self) -> str:
        return self.id


def permissions_by_category(
    permissions: Iterable[Permission],
) -> dict[str, tuple[Permission, ...]]:
    """Group *permissions* by category.

    Categories appear in first-seen order; within a category, permissions
    keep their input order.
    """
    grouped: dict[str, list[Permission]] = {}
    for permission in permissions:
        grouped.setdefault(permission.category, []).append(permission)
    return {category: tuple(items) for category, items in grouped.items()}


class PermissionCatalog:
    """Static registry of permissions, enumerable and groupable.

    Reads never lock: the entries live in an immutable tuple that
    :meth:`register` replaces wholesale.

    Example::

        catalog = PermissionCatalog([
            Permission("jobs.view", "View Jobs", "View job listings", "Jobs"),
        ])
        catalog.by_category()  # {"Jobs": (Permission(...),)}
    """

    def __init__(self, permissions: Iterable[Permission] = ()) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[Permission, ...] = ()
        self._index: dict[str, Permission] = {}
        for permission in permissions:
            self.register(permission)

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def all(self) -> tuple[Permission, ...]:
        """Return every permission in insertion order."""
        return self._entries

    def ids(self) -> tuple[str, ...]:
        return tuple(p.id for p in self._entries)

    def get(self, permission_id: object) -> Permission | None:
        if not isinstance(permission_id, str):
            return None
        return self._index.get(permission_id)

    def resolve(self, permission_ids: Iterable[str]) -> tuple[Permission, ...]:
        """Return the catalog entries for *permission_ids* in catalog order.

        Unknown ids are skipped.
        """
        wanted = {pid for pid in permission_ids if isinstance(pid, str)}
        return tuple(p for p in self._entries if p.id in wanted)

    def by_category(
        self, permissions: Sequence[Permission] | None = None
    ) -> dict[str, tuple[Permission, ...]]:
        """Group *permissions* (default: the whole catalog) by category."""
        return permissions_by_category(self._entries if permissions is None else permissions)

    def categories(self) -> tuple[str, ...]:
        return tuple(self.by_category())

    def __contains__(self, permission_id: object) -> bool:
        return isinstance(permission_id, str) and permission_id in self._index

    def __iter__(self) -> Iterator[Permission]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    # ------------------------------------------------------------------
    # Mutation (append-only)
    # ------------------------------------------------------------------

    def register(self, permission: Permission) -> Permission:
        """Append *permission* to the catalog.

        Raises
        ------
        ValidationError
            When the id is not a ``<domain>.<verb>`` string or the category
            is blank.
        ConflictError
            When a permission with the same id is already registered.
        """
        pid = PermissionId(permission.id)
        if not permission.category.strip():
            raise ValidationError(
                f"Permission {permission.id!r} has no category",
                errors=[{"field": "category", "message": "required"}],
            )
        with self._lock:
            if permission.id in self._index:
                raise ConflictError(
                    f"Permission '{permission.id}' is already registered",
                    entity="permission",
                    entity_id=permission.id,
                )
            index = dict(self._index)
            index[permission.id] = permission
            self._index = index
            self._entries = self._entries + (permission,)
        _log.debug("catalog.permission_registered", permission_id=pid.value, domain=pid.domain, category=permission.category)
        return permission


__all__ = ["Permission", "PermissionCatalog", "permissions_by_category"]
