"""Access – AccessGuard, a declarative admit / deny / loading gate.

Requirement precedence:

1. ``permission`` given: only that single permission is evaluated, even if
   ``permissions`` is also given.
2. otherwise ``permissions`` given and non-empty: any-of, or all-of with
   ``require_all=True``.
3. neither: always admit (public content).

Until the context is ``READY`` (still ``UNINITIALIZED``, or ``LOADING``) the
guard answers ``LOADING``, never ``DENY`` and never ``ADMIT``, public guards
included. Nothing is cached; every call asks the context again.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
from collections.abc import Iterable
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from admin_access.access.context import AdminContext
from admin_access.observability.logging import AuditOutcome, get_logger

if TYPE_CHECKING:
    from admin_access.observability.logging import AuditLogger

F = TypeVar("F", bound=Callable[..., Any])

_log = get_logger(__name__)


class GuardDecision(str, Enum):
    ADMIT = "admit"
    DENY = "deny"
    LOADING = "loading"


@dataclasses.dataclass(frozen=True)
class Placeholder:
    """Inert stand-in returned instead of protected content."""

    kind: str
    message: str

    def __str__(self) -> str:
        return self.message


ACCESS_DENIED = Placeholder("access_denied", "You don't have permission to access this feature.")
LOADING_PLACEHOLDER = Placeholder("loading", "Loading...")


def _normalise_permissions(permissions: Any) -> Any:
    """Return ``None`` for "no requirement", a tuple for a usable sequence.

    Anything else (a bare string, a non-iterable) is passed through untouched
    so the evaluator denies it.
    """
    if permissions is None:
        return None
    if isinstance(permissions, (str, bytes)) or not isinstance(permissions, Iterable):
        return permissions
    return tuple(permissions) or None


class AccessGuard:
    """Admit protected content only when the current admin passes the check.

    Example::

        guard = AccessGuard(ctx, permission="roles.manage")
        guard.render(role_editor)                       # role_editor, ACCESS_DENIED or LOADING_PLACEHOLDER
        guard.render(role_editor, fallback=read_only)   # custom fallback

        @AccessGuard(ctx, permissions=["jobs.edit", "jobs.publish"], require_all=True).protect()
        def publish(job_id: str) -> str: ...
    """

    def __init__(
        self,
        context: AdminContext,
        permission: str | None = None,
        permissions: Iterable[str] | None = None,
        *,
        require_all: bool = False,
        audit_logger: "AuditLogger | None" = None,
    ) -> None:
        self._context = context
        self._permission = permission
        self._permissions = _normalise_permissions(permissions)
        self._require_all = require_all
        self._audit = audit_logger

    @property
    def is_public(self) -> bool:
        return self._permission is None and self._permissions is None

    def describe(self) -> str:
        if self._permission is not None:
            return str(self._permission)
        if self._permissions is None:
            return "public"
        joiner = " & " if self._require_all else " | "
        if isinstance(self._permissions, tuple):
            return joiner.join(str(p) for p in self._permissions)
        return repr(self._permissions)

    def _granted(self) -> bool:
        if self._permission is not None:
            return self._context.check_permission(self._permission)
        if self._permissions is not None:
            if self._require_all:
                return self._context.check_all_permissions(self._permissions)
            return self._context.check_any_permission(self._permissions)
        return True

    def decide(self) -> GuardDecision:
        # identity not yet known
        if not self._context.is_ready():
            return GuardDecision.LOADING
        if self._granted():
            return GuardDecision.ADMIT
        self._record_denial()
        return GuardDecision.DENY

    def allows(self) -> bool:
        return self.decide() is GuardDecision.ADMIT

    def render(self, protected: Any, fallback: Any = ACCESS_DENIED) -> Any:
        """Return *protected*, *fallback* or :data:`LOADING_PLACEHOLDER`."""
        decision = self.decide()
        if decision is GuardDecision.LOADING:
            return LOADING_PLACEHOLDER
        if decision is GuardDecision.ADMIT:
            return protected
        return fallback

    def run(self, fn: Callable[..., Any], *args: Any, fallback: Any = ACCESS_DENIED, **kwargs: Any) -> Any:
        """Call ``fn(*args, **kwargs)`` only when admitted."""
        decision = self.decide()
        if decision is GuardDecision.LOADING:
            return LOADING_PLACEHOLDER
        if decision is GuardDecision.ADMIT:
            return fn(*args, **kwargs)
        return fallback

    def protect(self, fallback: Any = ACCESS_DENIED) -> Callable[[F], F]:
        """Decorator form of :meth:`run` for sync and async callables."""

        def decorator(fn: F) -> F:
            if inspect.iscoroutinefunction(fn):

                @functools.wraps(fn)
                async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                    decision = self.decide()
                    if decision is GuardDecision.LOADING:
                        return LOADING_PLACEHOLDER
                    if decision is GuardDecision.DENY:
                        return fallback
                    return await fn(*args, **kwargs)

                return async_wrapper  # type: ignore[return-value]

            @functools.wraps(fn)
            def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
                return self.run(fn, *args, fallback=fallback, **kwargs)

            return sync_wrapper  # type: ignore[return-value]

        return decorator

    def _record_denial(self) -> None:
        admin = self._context.current_admin()
        _log.debug(
            "guard.denied",
            requirement=self.describe(),
            admin_id=admin.id if admin else None,
        )
        if self._audit is not None:
            self._audit.log_access(
                admin,
                resource=self.describe(),
                action="guard",
                outcome=AuditOutcome.DENIED,
            )


__all__ = [
    "ACCESS_DENIED",
    "AccessGuard",
    "GuardDecision",
    "LOADING_PLACEHOLDER",
    "Placeholder",
]
