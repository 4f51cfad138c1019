"""Config settings – Settings base class."""
from __future__ import annotations

import dataclasses
from typing import Any, ClassVar

from admin_access.config.errors import InvalidSettingValueError


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings.

    Subclasses set ``_prefix``; field ``foo`` is then read from
    ``<PREFIX>_FOO``. Override ``_validate`` for field checks and raise
    through :meth:`_invalid` so the error names the variable to fix.
    """

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""

    @classmethod
    def env_var(cls, field_name: str) -> str:
        return f"{cls._prefix}_{field_name}".upper().lstrip("_")

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        return tuple(
            f.name
            for f in dataclasses.fields(cls)  # type: ignore[arg-type]
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
        )

    def _invalid(self, field_name: str, value: Any, reason: str) -> InvalidSettingValueError:
        return InvalidSettingValueError(field_name, value, reason, env_var=self.env_var(field_name))


__all__ = ["Settings"]
