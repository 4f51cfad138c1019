"""Access – AdminUser identity."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum

from admin_access.kernel.time import Clock
from admin_access.kernel.types import Email


class AdminStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclasses.dataclass(frozen=True)
class AdminUser:
    """An admin identity.

    ``role`` is a non-owning reference to a :class:`Role` id. If that role is
    later deleted, the admin keeps the dangling id and evaluates to zero
    permissions. ``email`` is stored in its :class:`Email` normal form, so an
    invalid address raises :class:`ValidationError`.
    """

    id: str
    name: str
    email: str
    role: str
    status: AdminStatus = AdminStatus.ACTIVE
    created_at: datetime | None = None
    last_login: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "email", Email(self.email).value)
        if not isinstance(self.status, AdminStatus):
            object.__setattr__(self, "status", AdminStatus(self.status))

    @property
    def is_active(self) -> bool:
        return self.status is AdminStatus.ACTIVE

    def with_role(self, role_id: str) -> "AdminUser":
        return dataclasses.replace(self, role=role_id)

    def touch_login(self, clock: Clock) -> "AdminUser":
        return dataclasses.replace(self, last_login=clock.now())


__all__ = ["AdminStatus", "AdminUser"]
