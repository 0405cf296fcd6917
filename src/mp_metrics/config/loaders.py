"""Config – EnvSettingsLoader, DotenvSettingsLoader.

A loader returns only the fields its source actually sets, already coerced
to the field types of :class:`MetricsSettings`; the factory layers them.
"""
from __future__ import annotations

import abc
import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from mp_metrics.config.errors import InvalidSettingValueError
from mp_metrics.config.metrics import MetricsSettings

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off", "")


def coerce(field: dataclasses.Field[Any], raw: str, source: str) -> Any:
    """Convert one raw string to *field*'s type."""
    type_name = field.type if isinstance(field.type, str) else field.type.__name__
    if type_name == "bool":
        lowered = raw.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise InvalidSettingValueError(field.name, raw, "expected a boolean", source=source)
    if type_name == "float":
        try:
            return float(raw)
        except ValueError as exc:
            raise InvalidSettingValueError(field.name, raw, "expected a number of seconds", source=source) from exc
    return raw.strip()


class SettingsLoader(abc.ABC):
    """Port: read ``MP_METRICS_*`` values from one source."""

    @abc.abstractmethod
    def raw_values(self) -> Mapping[str, str | None]:
        """Source contents keyed by variable name."""

    def load(self) -> dict[str, Any]:
        raw = self.raw_values()
        values: dict[str, Any] = {}
        for field in dataclasses.fields(MetricsSettings):
            key = MetricsSettings.env_key(field.name)
            value = raw.get(key)
            if value is not None:
                values[field.name] = coerce(field, value, key)
        return values


class EnvSettingsLoader(SettingsLoader):
    """Read the process environment (or an injected mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def raw_values(self) -> Mapping[str, str | None]:
        return os.environ if self._environ is None else self._environ


class DotenvSettingsLoader(SettingsLoader):
    """Read a ``.env`` file without touching ``os.environ``.

    Place it before :class:`EnvSettingsLoader` so real environment
    variables win over the file.
    """

    def __init__(self, env_file: str = ".env") -> None:
        self._env_file = env_file

    def raw_values(self) -> Mapping[str, str | None]:
        try:
            from dotenv import dotenv_values  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'mp-metrics[dotenv]' to use DotenvSettingsLoader") from exc
        return dotenv_values(self._env_file)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader", "coerce"]
