"""String-based identifier value objects.

Permission ids are namespaced ``<domain>.<verb>`` strings (``jobs.delete``,
``roles.manage``). They are the durable key of a permission: role data refers
to them by text, never by catalog position.
"""

from __future__ import annotations

import dataclasses
import re
import uuid
from typing import Any, Final

from admin_access.kernel.errors import ValidationError

_PERMISSION_PATTERN: Final = re.compile(r"^[a-z][a-z0-9_]*(?:\.[a-z][a-z0-9_]*)+$")
_ROLE_PATTERN: Final = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def is_permission_id(value: Any) -> bool:
    """Return ``True`` if *value* is a well-formed permission id string.

    Never raises; used by the evaluator to fail closed on malformed input.
    """
    return isinstance(value, str) and bool(_PERMISSION_PATTERN.match(value))


def role_id_from_name(name: str) -> str:
    """Derive a ``snake_case`` role id from a display name.

    ``"Content Moderator"`` becomes ``"content_moderator"``. Falls back to a
    random ``role_<hex>`` id when the name has no usable characters.
    """
    value = name.lower().strip()
    value = re.sub(r"[^\w\s-]", "", value)
    value = re.sub(r"[\s\-]+", "_", value)
    value = re.sub(r"_+", "_", value).strip("_")
    if not value:
        value = f"role_{uuid.uuid4().hex[:8]}"
    return value


@dataclasses.dataclass(frozen=True, slots=True)
class _StrId:
    """Base for string-typed identifiers."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValidationError.for_field("id", f"{type(self).__name__} must not be empty")

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class PermissionId(_StrId):
    """Dot-namespaced permission identifier.

    Examples::

        pid = PermissionId("jobs.delete")
        pid.domain  # "jobs"
        pid.verb    # "delete"
    """

    def __post_init__(self) -> None:
        if not is_permission_id(self.value):
            raise ValidationError.for_field("id", f"expected '<domain>.<verb>', got {self.value!r}")

    @property
    def domain(self) -> str:
        return self.value.split(".", 1)[0]

    @property
    def verb(self) -> str:
        return self.value.rsplit(".", 1)[1]


@dataclasses.dataclass(frozen=True, slots=True)
class RoleId(_StrId):
    """Role identifier (``snake_case`` slug, e.g. ``job_manager``)."""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _ROLE_PATTERN.match(self.value):
            raise ValidationError.for_field("id", f"expected a snake_case role id, got {self.value!r}")

    @classmethod
    def from_name(cls, name: str) -> "RoleId":
        return cls(role_id_from_name(name))


@dataclasses.dataclass(frozen=True, slots=True)
class AdminId(_StrId):
    """Admin user identifier."""

    @classmethod
    def generate(cls) -> "AdminId":
        """Return a new random ``AdminId``."""
        return cls(f"admin_{uuid.uuid4().hex[:12]}")


__all__ = [
    "AdminId",
    "PermissionId",
    "RoleId",
    "is_permission_id",
    "role_id_from_name",
]
