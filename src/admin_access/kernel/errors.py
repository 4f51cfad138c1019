"""Kernel errors raised at the management and configuration boundaries.

Hierarchy::

    BaseError
    ├── DomainError
    │   ├── ValidationError      rejected role / admin edit (field errors)
    │   ├── NotFoundError        unknown role or admin id
    │   └── ConflictError        duplicate id, or a stale role version
    └── ApplicationError
        ├── UnauthorizedError    nobody signed in, or identity still loading
        └── ForbiddenError       the admin's role lacks the permission

Permission checks never raise; a denial is a ``False``. These errors come
from the management service, catalog registration and settings loading.

``to_dict()`` is a flat payload, ``{"error": code, "message": ..., **detail}``.
The management service writes it verbatim into the audit entry of a failed
or denied mutation, so detail keys avoid the audit entry's own field names
(``resource``, ``action``, ``outcome``).
"""

from __future__ import annotations

from typing import Any


class BaseError(Exception):
    """Root of the hierarchy.

    Keyword arguments other than ``code`` become ``detail``; ``None`` values
    are dropped so payloads only carry what is known.
    """

    default_code: str = "error"

    def __init__(self, message: str, *, code: str | None = None, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = {k: v for k, v in detail.items() if v is not None}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, **self.detail}


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------


class DomainError(BaseError):
    default_code = "domain_error"


class ValidationError(DomainError):
    """An edit request or identifier failed validation.

    ``errors`` holds ``{"field": ..., "message": ...}`` entries, one per
    rejected field, in the order the checks ran.
    """

    default_code = "validation_error"

    def __init__(self, message: str, *, errors: list[dict[str, str]] | None = None, **detail: Any) -> None:
        self.errors: list[dict[str, str]] = list(errors or [])
        super().__init__(message, errors=self.errors or None, **detail)

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors if "field" in e]

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(f"Invalid {field}: {message}", errors=[{"field": field, "message": message}])


class NotFoundError(DomainError):
    """``entity`` is ``"role"`` or ``"admin"``."""

    default_code = "not_found"

    def __init__(self, entity: str, entity_id: Any = None) -> None:
        message = f"{entity} not found" if entity_id is None else f"{entity} '{entity_id}' not found"
        super().__init__(message, entity=entity.lower(), entity_id=entity_id)
        self.entity = entity.lower()
        self.entity_id = entity_id


class ConflictError(DomainError):
    default_code = "conflict"


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


class ApplicationError(BaseError):
    default_code = "application_error"


class UnauthorizedError(ApplicationError):
    default_code = "unauthorized"

    def __init__(self, message: str = "Not signed in", *, permission: str | None = None, **detail: Any) -> None:
        super().__init__(message, permission=permission, **detail)
        self.permission = permission


class ForbiddenError(ApplicationError):
    default_code = "forbidden"

    def __init__(self, message: str = "Access denied", *, permission: str | None = None, **detail: Any) -> None:
        super().__init__(message, permission=permission, **detail)
        self.permission = permission


__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
]
