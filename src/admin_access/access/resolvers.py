"""Access – identity resolvers feeding :meth:`AdminContext.load`.

A resolver stands in for the session / token lookup owned by the
surrounding authentication layer.
"""
from __future__ import annotations

from typing import Protocol

from admin_access.access.directory import AdminDirectory
from admin_access.access.identity import AdminUser
from admin_access.kernel.time import Clock, SystemClock


class IdentityResolver(Protocol):
    """Port: resolve who the current admin is."""

    async def resolve(self) -> AdminUser | None: ...


class StaticIdentityResolver:
    """Always resolves to the same admin (or to nobody)."""

    def __init__(self, admin: AdminUser | None) -> None:
        self._admin = admin

    async def resolve(self) -> AdminUser | None:
        return self._admin


class DirectoryIdentityResolver:
    """Resolve the admin with *admin_id* from a directory.

    With no *admin_id* the first directory entry is used, which is how the
    console seeds an identity before real authentication is wired in. The
    resolved admin's ``last_login`` is stamped and written back.
    """

    def __init__(
        self,
        directory: AdminDirectory,
        admin_id: str | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._directory = directory
        self._admin_id = admin_id or None
        self._clock = clock or SystemClock()

    async def resolve(self) -> AdminUser | None:
        if self._admin_id is None:
            admin = self._directory.first()
        else:
            admin = self._directory.find(self._admin_id)
        if admin is None:
            return None
        return self._directory.update(admin.id, lambda current: current.touch_login(self._clock))


__all__ = ["DirectoryIdentityResolver", "IdentityResolver", "StaticIdentityResolver"]
