"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from admin_access.config.errors import ConfigError, MissingRequiredSettingError
from admin_access.config.settings.base import Settings
from admin_access.config.settings.loaders import SettingsLoader
from admin_access.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

_log = get_logger(__name__)


class SettingsFactory:
    """Merge loader outputs and overrides into one settings instance.

    Loaders are applied in order and later ones win on overlapping fields;
    *overrides* win over every loader. A loader that fails is logged with the
    reason and skipped, so ``build_console`` still starts from defaults when,
    say, a ``.env`` value is malformed. Values that reach the constructor are
    validated there and raise.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            A field without a default is absent after merging.
        InvalidSettingValueError
            A merged value fails the settings' own validation.
        ConfigError
            On any other construction failure (e.g. an unknown override key).
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                instance = loader.load(settings_cls)
            except Exception as exc:  # noqa: BLE001 – skip failing loaders
                _log.warning(
                    "settings.loader_skipped",
                    loader=type(loader).__name__,
                    settings=settings_cls.__name__,
                    error=str(exc),
                    env_var=getattr(exc, "env_var", None),
                )
                continue
            merged.update(dataclasses.asdict(instance))

        merged.update(overrides or {})

        for name in settings_cls.required_fields():
            if name not in merged:
                raise MissingRequiredSettingError(name, env_var=settings_cls.env_var(name))

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
