"""Access – PermissionSet, the immutable permission-id set held by a role."""

from __future__ import annotations

from typing import Iterable, Iterator


class PermissionSet:
    """Immutable set of permission ids that remembers first-insertion order.

    Membership is the only operation the evaluator needs; order is kept for
    display. :meth:`add` and :meth:`remove` return new sets.

    Example::

        perms = PermissionSet(["jobs.view", "jobs.edit"])
        perms.contains("jobs.view")         # True
        perms.add("jobs.delete").remove("jobs.edit").to_ordered_sequence()
        # ("jobs.view", "jobs.delete")
    """

    __slots__ = ("_ordered", "_members")

    def __init__(self, permission_ids: Iterable[str] = ()) -> None:
        if isinstance(permission_ids, str):
            permission_ids = (permission_ids,)
        ordered = tuple(dict.fromkeys(permission_ids))
        self._ordered: tuple[str, ...] = ordered
        self._members: frozenset[str] = frozenset(ordered)

    def contains(self, permission_id: object) -> bool:
        try:
            return permission_id in self._members
        except TypeError:
            # unhashable input
            return False

    def add(self, permission_id: str) -> "PermissionSet":
        if permission_id in self._members:
            return self
        return PermissionSet(self._ordered + (permission_id,))

    def remove(self, permission_id: str) -> "PermissionSet":
        if not self.contains(permission_id):
            return self
        return PermissionSet(p for p in self._ordered if p != permission_id)

    def union(self, permission_ids: Iterable[str]) -> "PermissionSet":
        return PermissionSet(self._ordered + tuple(permission_ids))

    def to_ordered_sequence(self) -> tuple[str, ...]:
        return self._ordered

    def __contains__(self, permission_id: object) -> bool:
        return self.contains(permission_id)

    def __iter__(self) -> Iterator[str]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PermissionSet):
            return self._members == other._members
        if isinstance(other, (set, frozenset)):
            return self._members == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"PermissionSet({list(self._ordered)!r})"


__all__ = ["PermissionSet"]
