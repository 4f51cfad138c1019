"""Access – permission evaluator.

Pure, total functions answering "can this role do X?". Nothing here raises
for the data it is given: an unknown role has zero permissions, an unknown
or malformed permission id never matches, and a non-iterable id sequence is
treated as a denial. The one deliberate asymmetry is that requiring *all* of
zero permissions is satisfied, while requiring *any* of zero is not.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from admin_access.access.permission_set import PermissionSet
from admin_access.access.roles import Role, RoleRegistry, RoleSnapshot

_EMPTY = PermissionSet()


def _is_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _ids(permission_ids: Any) -> tuple[Any, ...] | None:
    """Materialise *permission_ids*; ``None`` when it is not a usable sequence."""
    if isinstance(permission_ids, (str, bytes)) or not isinstance(permission_ids, Iterable):
        return None
    return tuple(permission_ids)


def _role(snapshot: RoleSnapshot, role_id: Any) -> Role | None:
    if not _is_id(role_id):
        return None
    return snapshot.get(role_id)


def _grants(role: Role | None, permission_id: Any) -> bool:
    return role is not None and _is_id(permission_id) and role.grants(permission_id)


class PermissionEvaluator:
    """Evaluate permission checks against a :class:`RoleRegistry`.

    Each call reads one registry snapshot, so a multi-id check is answered
    against a single consistent version of the role.

    Example::

        evaluator = PermissionEvaluator(registry)
        evaluator.has_permission("job_manager", "jobs.delete")          # False
        evaluator.has_any_permission("job_manager", ["jobs.delete", "jobs.edit"])  # True
    """

    def __init__(self, registry: RoleRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> RoleRegistry:
        return self._registry

    def has_permission(self, role_id: str | None, permission_id: str | None) -> bool:
        """Return ``True`` iff the role exists and holds *permission_id*."""
        return _grants(_role(self._registry.snapshot(), role_id), permission_id)

    def has_any_permission(self, role_id: str | None, permission_ids: Iterable[str]) -> bool:
        """Return ``True`` iff the role holds at least one id; ``False`` for no ids."""
        ids = _ids(permission_ids)
        if not ids:
            return False
        role = _role(self._registry.snapshot(), role_id)
        return any(_grants(role, pid) for pid in ids)

    def has_all_permissions(self, role_id: str | None, permission_ids: Iterable[str]) -> bool:
        """Return ``True`` iff the role holds every id; ``True`` for no ids."""
        ids = _ids(permission_ids)
        if ids is None:
            return False
        if not ids:
            return True
        role = _role(self._registry.snapshot(), role_id)
        return all(_grants(role, pid) for pid in ids)

    def permissions_for(self, role_id: str | None) -> PermissionSet:
        """Return the role's permission set (empty for unknown roles)."""
        role = _role(self._registry.snapshot(), role_id)
        return role.permissions if role is not None else _EMPTY


def has_permission(registry: RoleRegistry, role_id: str | None, permission_id: str | None) -> bool:
    return PermissionEvaluator(registry).has_permission(role_id, permission_id)


def has_any_permission(
    registry: RoleRegistry, role_id: str | None, permission_ids: Iterable[str]
) -> bool:
    return PermissionEvaluator(registry).has_any_permission(role_id, permission_ids)


def has_all_permissions(
    registry: RoleRegistry, role_id: str | None, permission_ids: Iterable[str]
) -> bool:
    return PermissionEvaluator(registry).has_all_permissions(role_id, permission_ids)


__all__ = [
    "PermissionEvaluator",
    "has_all_permissions",
    "has_any_permission",
    "has_permission",
]
