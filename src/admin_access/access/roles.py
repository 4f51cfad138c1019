"""Access – Role and RoleRegistry.

Roles are immutable values. Every edit produces a new :class:`Role` with a
bumped ``version``, and every registry mutation publishes a new read-only
snapshot, so a concurrent evaluator call sees either the old role or the new
one, never a half-updated permission set.
"""

from __future__ import annotations

import dataclasses
import threading
from datetime import datetime
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Iterable, Mapping

from admin_access.access.permission_set import PermissionSet
from admin_access.kernel.errors import ConflictError
from admin_access.observability.logging import get_logger

if TYPE_CHECKING:
    from admin_access.access.catalog import PermissionCatalog

_log = get_logger(__name__)

RoleSnapshot = Mapping[str, "Role"]


@dataclasses.dataclass(frozen=True)
class Role:
    """A named bundle of permission ids assignable to an admin.

    ``permissions`` accepts any iterable of ids and is normalised to a
    :class:`PermissionSet`. Ids missing from the catalog are kept as-is and
    simply never match.

    Example::

        manager = Role(
            id="job_manager",
            name="Job Manager",
            description="Manage job postings",
            permissions=["jobs.view", "jobs.edit"],
        )
        manager.with_permission("jobs.delete").version  # 2
    """

    id: str
    name: str
    description: str = ""
    permissions: PermissionSet = dataclasses.field(default_factory=PermissionSet)
    color: str = ""
    version: int = 1
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.permissions, PermissionSet):
            object.__setattr__(self, "permissions", PermissionSet(self.permissions))

    def grants(self, permission_id: object) -> bool:
        return self.permissions.contains(permission_id)

    def revise(self, **changes: object) -> "Role":
        return dataclasses.replace(self, version=self.version + 1, **changes)

    def with_permission(self, permission_id: str) -> "Role":
        return self.revise(permissions=self.permissions.add(permission_id))

    def without_permission(self, permission_id: str) -> "Role":
        return self.revise(permissions=self.permissions.remove(permission_id))

    def with_permissions(self, permission_ids: Iterable[str]) -> "Role":
        """Replace the whole permission set."""
        return self.revise(permissions=PermissionSet(permission_ids))

    def renamed(self, name: str, description: str | None = None) -> "Role":
        return self.revise(
            name=name,
            description=self.description if description is None else description,
        )

    def stamped(self, when: datetime) -> "Role":
        return dataclasses.replace(self, updated_at=when)


class RoleRegistry:
    """In-process registry of roles keyed by id.

    ``find`` and ``list`` read the current snapshot without locking. Writers
    (``upsert``, ``update`` and ``remove``) serialise on a lock, copy the
    mapping, and publish the copy in one assignment. Read-modify-write edits
    go through ``update`` so they see the latest version of the role.
    """

    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._lock = threading.Lock()
        initial: dict[str, Role] = {}
        for role in roles:
            initial[role.id] = role
        self._snapshot: RoleSnapshot = MappingProxyType(initial)

    def snapshot(self) -> RoleSnapshot:
        """Return the current immutable ``{role_id: Role}`` view."""
        return self._snapshot

    def find(self, role_id: object) -> Role | None:
        if not isinstance(role_id, str):
            return None
        return self._snapshot.get(role_id)

    def list(self) -> tuple[Role, ...]:
        return tuple(self._snapshot.values())

    def ids(self) -> tuple[str, ...]:
        return tuple(self._snapshot)

    def __contains__(self, role_id: object) -> bool:
        return self.find(role_id) is not None

    def __len__(self) -> int:
        return len(self._snapshot)

    def upsert(self, role: Role, *, expected_version: int | None = None) -> Role:
        """Insert *role* or replace the role with the same id (keeps its position).

        With *expected_version* the write is a compare-and-set: ``0`` means the
        id must be unused, any other value must equal the stored role's
        version. A mismatch raises :class:`ConflictError` and publishes nothing.
        """
        with self._lock:
            current = self._snapshot.get(role.id)
            if expected_version is not None:
                found = 0 if current is None else current.version
                if found != expected_version:
                    message = (
                        f"Role '{role.id}' already exists"
                        if expected_version == 0
                        else f"Role '{role.id}' is at version {found}, expected {expected_version}"
                    )
                    raise ConflictError(
                        message,
                        entity="role",
                        entity_id=role.id,
                        expected_version=expected_version,
                        found_version=found,
                    )
            self._publish(role)
        _log.debug(
            "roles.upserted",
            role_id=role.id,
            version=role.version,
            created=current is None,
            permission_count=len(role.permissions),
        )
        return role

    def update(self, role_id: str, change: Callable[[Role], Role]) -> Role | None:
        """Apply *change* to the stored role and publish the result atomically.

        *change* runs under the writer lock, so concurrent edits of the same
        role are applied one after the other and none is lost. Returns the new
        role, or ``None`` if *role_id* is not registered. An exception raised
        by *change* propagates and leaves the registry untouched.
        """
        with self._lock:
            current = self._snapshot.get(role_id)
            if current is None:
                return None
            role = change(current)
            if role.id != role_id:
                raise ConflictError(f"Cannot change role id '{role_id}' to '{role.id}'")
            self._publish(role)
        _log.debug(
            "roles.updated",
            role_id=role_id,
            version=role.version,
            permission_count=len(role.permissions),
        )
        return role

    def _publish(self, role: Role) -> None:
        # caller holds self._lock
        updated = dict(self._snapshot)
        updated[role.id] = role
        self._snapshot = MappingProxyType(updated)

    def remove(self, role_id: str) -> Role | None:
        """Remove and return the role, or ``None`` if it was not registered."""
        with self._lock:
            if role_id not in self._snapshot:
                return None
            updated = dict(self._snapshot)
            removed = updated.pop(role_id)
            self._snapshot = MappingProxyType(updated)
        _log.debug("roles.removed", role_id=role_id)
        return removed

    def dangling_permissions(self, catalog: "PermissionCatalog") -> dict[str, tuple[str, ...]]:
        """Map role ids to the permission ids they hold that *catalog* lacks."""
        result: dict[str, tuple[str, ...]] = {}
        for role in self._snapshot.values():
            missing = tuple(p for p in role.permissions if p not in catalog)
            if missing:
                result[role.id] = missing
        return result


__all__ = ["Role", "RoleRegistry", "RoleSnapshot"]
