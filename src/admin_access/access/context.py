"""Access – AdminContext, the holder of the signed-in admin.

Lifecycle::

    UNINITIALIZED --begin_loading()--> LOADING --on_identity_resolved()--> READY
                                          ^                                  |
                                          +----------begin_loading()---------+

The context is an ordinary object handed to whoever needs it (guards,
management services, request handlers); there is no module-level singleton.
It has a single-writer contract: sign-in / sign-out flows call
:meth:`on_identity_resolved` or :meth:`set_current_admin`, everyone else only
reads. State and admin are published together as one tuple, so a reader never
sees a new state paired with an old admin.

Every check fails closed: while not ``READY``, or with no admin, the answer is
``False``. :meth:`is_loading` lets callers tell "denied" from "not yet known".
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from admin_access.access.evaluator import PermissionEvaluator
from admin_access.access.identity import AdminUser
from admin_access.access.roles import Role
from admin_access.observability.logging import get_logger

if TYPE_CHECKING:
    from admin_access.access.resolvers import IdentityResolver

_log = get_logger(__name__)


class ContextState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class AdminContext:
    """Current-admin holder exposing evaluator results bound to that admin.

    Example::

        ctx = AdminContext(PermissionEvaluator(registry))
        ctx.begin_loading()
        ctx.check_permission("jobs.view")   # False, ctx.is_loading() is True
        ctx.on_identity_resolved(admin)
        ctx.check_permission("jobs.view")   # delegated to the evaluator
    """

    def __init__(self, evaluator: PermissionEvaluator) -> None:
        self._evaluator = evaluator
        self._write_lock = threading.Lock()
        self._current: tuple[ContextState, AdminUser | None] = (ContextState.UNINITIALIZED, None)

    @property
    def evaluator(self) -> PermissionEvaluator:
        return self._evaluator

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> ContextState:
        return self._current[0]

    def is_loading(self) -> bool:
        return self._current[0] is ContextState.LOADING

    def is_ready(self) -> bool:
        return self._current[0] is ContextState.READY

    def begin_loading(self) -> None:
        """Enter ``LOADING``; the previous admin is dropped until resolution completes."""
        with self._write_lock:
            self._current = (ContextState.LOADING, None)
        _log.debug("identity.loading")

    def on_identity_resolved(self, admin: AdminUser | None) -> None:
        """Enter ``READY`` with *admin* (``None`` means nobody is signed in)."""
        with self._write_lock:
            self._current = (ContextState.READY, admin)
        _log.info(
            "identity.resolved",
            admin_id=admin.id if admin else None,
            role=admin.role if admin else None,
        )

    async def load(self, resolver: "IdentityResolver") -> AdminUser | None:
        """Resolve the current admin through *resolver*.

        The context reports ``LOADING`` while the resolver runs. If the
        resolver raises, the context settles on ``READY`` with no admin and
        the exception propagates.
        """
        self.begin_loading()
        try:
            admin = await resolver.resolve()
        except Exception:
            self.on_identity_resolved(None)
            _log.warning("identity.resolution_failed", resolver=type(resolver).__name__)
            raise
        self.on_identity_resolved(admin)
        return admin

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def current_admin(self) -> AdminUser | None:
        state, admin = self._current
        return admin if state is ContextState.READY else None

    def set_current_admin(self, admin: AdminUser | None) -> None:
        """Replace the active identity; takes effect on the next check."""
        with self._write_lock:
            previous = self._current[1]
            self._current = (ContextState.READY, admin)
        _log.info(
            "identity.switched",
            previous_admin_id=previous.id if previous else None,
            admin_id=admin.id if admin else None,
        )

    def current_role(self) -> Role | None:
        admin = self.current_admin()
        if admin is None:
            return None
        return self._evaluator.registry.find(admin.role)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def check_permission(self, permission_id: str) -> bool:
        admin = self.current_admin()
        if admin is None:
            return False
        return self._evaluator.has_permission(admin.role, permission_id)

    def check_any_permission(self, permission_ids: Iterable[str]) -> bool:
        admin = self.current_admin()
        if admin is None:
            return False
        return self._evaluator.has_any_permission(admin.role, permission_ids)

    def check_all_permissions(self, permission_ids: Iterable[str]) -> bool:
        admin = self.current_admin()
        if admin is None:
            return False
        return self._evaluator.has_all_permissions(admin.role, permission_ids)


__all__ = ["AdminContext", "ContextState"]
