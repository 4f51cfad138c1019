"""Config errors.

Every error names both the settings field and the environment variable an
operator has to set or fix (``ADMIN_ACCESS_LOG_LEVEL`` rather than
``log_level``).
"""
from __future__ import annotations

from admin_access.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Settings could not be loaded or constructed."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str, *, env_var: str | None = None) -> None:
        hint = f" (set {env_var})" if env_var else ""
        super().__init__(f"Required setting '{setting_name}' is missing{hint}", setting=setting_name, env_var=env_var)
        self.setting_name = setting_name
        self.env_var = env_var


class InvalidSettingValueError(ConfigError):
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str, *, env_var: str | None = None) -> None:
        source = env_var or setting_name
        super().__init__(
            f"{source}={value!r} is invalid: {reason}",
            setting=setting_name,
            env_var=env_var,
            reason=reason,
        )
        self.setting_name = setting_name
        self.env_var = env_var
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
