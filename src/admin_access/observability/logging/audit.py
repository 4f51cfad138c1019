"""Observability – AuditLogger.

A dedicated structured-log sink for role edits, admin edits and denied
management attempts. It records what happened; it makes no tamper-evidence
or retention guarantees.
"""
from __future__ import annotations

import datetime
from enum import Enum
from typing import Any

from admin_access.observability.logging.processors import get_logger


class AuditOutcome(str, Enum):
    """Standardised audit outcomes."""

    SUCCESS = "success"
    FAILURE = "failure"
    DENIED = "denied"
    ERROR = "error"


def _principal_id(principal: Any) -> str | None:
    if principal is None:
        return None
    return getattr(principal, "id", None) or str(principal)


class AuditLogger:
    """Dedicated structured-log sink for security-sensitive actions.

    All audit entries are emitted at ``WARNING`` level so they pass through
    even restrictive log-level filters.

    Parameters
    ----------
    service:
        Logical service name injected into every audit entry.
    logger:
        Underlying structlog-style logger (``logger.warning(event, **kw)``).
        Defaults to ``get_logger("audit")``.
    """

    def __init__(
        self,
        service: str = "admin-console",
        logger: Any = None,
    ) -> None:
        self._service = service
        self._log = logger if logger is not None else get_logger("audit")

    def log_access(
        self,
        principal: Any,
        resource: str,
        action: str,
        outcome: AuditOutcome | str = AuditOutcome.SUCCESS,
        **extra: Any,
    ) -> None:
        """Record an access or mutation attempt.

        Parameters
        ----------
        principal:
            The admin performing the action (``principal.id`` when present,
            ``"anonymous"`` when ``None``).
        resource:
            The resource being accessed (e.g. ``"role:job_manager"``).
        action:
            The action performed (e.g. ``"roles.manage"``, ``"delete"``).
        outcome:
            :class:`AuditOutcome` or plain string.
        **extra:
            Additional structured fields to include in the audit entry.
        """
        entry: dict[str, Any] = {
            "service": self._service,
            "principal_id": _principal_id(principal) or "anonymous",
            "resource": resource,
            "action": action,
            "outcome": outcome.value if isinstance(outcome, AuditOutcome) else str(outcome),
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        }
        self._log.warning("audit.access", **entry)

    def log_security_event(
        self,
        event_type: str,
        principal: Any = None,
        description: str = "",
        **extra: Any,
    ) -> None:
        """Record an identity event (``sign_in``, ``sign_out``, ``admin_switch``)."""
        entry: dict[str, Any] = {
            "service": self._service,
            "event_type": event_type,
            "description": description,
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            **extra,
        }
        principal_id = _principal_id(principal)
        if principal_id is not None:
            entry["principal_id"] = principal_id
        self._log.warning(f"audit.{event_type}", **entry)


__all__ = ["AuditLogger", "AuditOutcome"]
