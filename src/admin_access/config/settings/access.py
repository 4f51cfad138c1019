"""Config settings – AccessSettings for the admin console evaluator."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from admin_access.config.settings.base import Settings

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclasses.dataclass
class AccessSettings(Settings):
    """Settings read from ``ADMIN_ACCESS_*`` environment variables.

    ``default_admin_id`` selects the seed identity used before real
    authentication is wired in; empty means the first admin in the directory.
    ``audit_denials`` sends every guard denial to the audit logger.
    """

    _prefix: ClassVar[str] = "ADMIN_ACCESS"

    service_name: str = "admin-console"
    log_level: str = "INFO"
    json_logs: bool = True
    audit_denials: bool = False
    default_admin_id: str = ""

    def _validate(self) -> None:
        level = str(self.log_level).upper()
        if level not in _LEVELS:
            raise self._invalid("log_level", self.log_level, f"expected one of {', '.join(_LEVELS)}")
        self.log_level = level
        if not self.service_name.strip():
            raise self._invalid("service_name", self.service_name, "must not be blank")

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)


__all__ = ["AccessSettings"]
