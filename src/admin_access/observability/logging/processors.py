"""Observability – structlog processors and get_logger helper."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from admin_access.access.context import AdminContext


class AdminContextProcessor:
    """structlog processor that injects the signed-in admin into log events.

    Injects the following fields when the bound :class:`AdminContext` has a
    current admin:

    * ``admin_id``
    * ``admin_role``

    and always ``identity_state`` (``uninitialized`` / ``loading`` / ``ready``).

    Usage::

        structlog.configure(processors=[AdminContextProcessor(ctx), ...])
    """

    def __init__(self, context: "AdminContext") -> None:
        self._context = context

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        event_dict.setdefault("identity_state", self._context.state.value)
        admin = self._context.current_admin()
        if admin is not None:
            event_dict.setdefault("admin_id", admin.id)
            event_dict.setdefault("admin_role", admin.role)
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["AdminContextProcessor", "get_logger"]
