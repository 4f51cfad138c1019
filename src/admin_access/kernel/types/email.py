"""Admin email addresses.

Admin accounts are looked up and compared by email without regard to case,
so addresses are stored lowercased and trimmed. :func:`normalise_email` is
the one place that rule lives; :class:`AdminUser` and the admin edit
request both go through it.
"""

from __future__ import annotations

import dataclasses
import re
from typing import Final

from admin_access.kernel.errors import ValidationError

_EMAIL_PATTERN: Final = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9\-]+(?:\.[a-z0-9\-]+)*\.[a-z]{2,}$")


def normalise_email(value: object) -> str | None:
    """Return the stored form of *value*, or ``None`` if it is not an address."""
    if not isinstance(value, str):
        return None
    candidate = value.strip().lower()
    return candidate if _EMAIL_PATTERN.match(candidate) else None


def is_email(value: object) -> bool:
    return normalise_email(value) is not None


@dataclasses.dataclass(frozen=True, slots=True)
class Email:
    """A normalised admin email address.

    Example::

        Email("  John@Zapply.com ").value  # "john@zapply.com"
        Email("john@zapply.com").domain    # "zapply.com"
    """

    value: str

    def __post_init__(self) -> None:
        normalised = normalise_email(self.value)
        if normalised is None:
            raise ValidationError.for_field("email", f"not an email address: {self.value!r}")
        object.__setattr__(self, "value", normalised)

    def __str__(self) -> str:
        return self.value

    @property
    def domain(self) -> str:
        return self.value.rsplit("@", 1)[1]


__all__ = ["Email", "is_email", "normalise_email"]
