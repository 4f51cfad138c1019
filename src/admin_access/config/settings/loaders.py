"""Config settings – EnvSettingsLoader, DotenvSettingsLoader.

Loaders read ``<PREFIX>_<FIELD>`` variables and coerce them by the field's
annotation. Only ``str``, ``bool`` and ``int`` fields are supported, which
is all the console's settings use.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from typing import Any, Mapping, TypeVar

from dotenv import dotenv_values

from admin_access.config.errors import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from admin_access.config.settings.base import Settings

T = TypeVar("T", bound=Settings)

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


def _type_name(hint: Any) -> str:
    # annotations are strings under ``from __future__ import annotations``
    return hint if isinstance(hint, str) else getattr(hint, "__name__", "")


def _coerce(raw: str, hint: Any, field_name: str, env_var: str) -> Any:
    kind = _type_name(hint)
    if kind == "bool":
        value = raw.strip().lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise InvalidSettingValueError(field_name, raw, "expected a boolean (true/false, 1/0, yes/no, on/off)", env_var=env_var)
    if kind == "int":
        try:
            return int(raw)
        except ValueError:
            raise InvalidSettingValueError(field_name, raw, "expected an integer", env_var=env_var) from None
    return raw


class EnvSettingsLoader(SettingsLoader):
    """Load settings from a variables mapping (default: ``os.environ``)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        kwargs: dict[str, Any] = {}
        required = set(settings_class.required_fields())

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_var = settings_class.env_var(field.name)
            raw = environ.get(env_var)
            if raw is None:
                if field.name in required:
                    raise MissingRequiredSettingError(field.name, env_var=env_var)
                continue
            kwargs[field.name] = _coerce(raw, field.type, field.name, env_var)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to load {settings_class.__name__}: {exc}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file layered with the process environment.

    Process variables win unless *override* is set. The process environment
    itself is never modified.
    """

    def __init__(self, env_file: str = ".env", *, override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        file_values = {k: v for k, v in dotenv_values(self._env_file).items() if v is not None}
        if self._override:
            merged = {**os.environ, **file_values}
        else:
            merged = {**file_values, **os.environ}
        return EnvSettingsLoader(merged).load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
