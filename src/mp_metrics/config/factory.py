"""Config – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence

from mp_metrics.config.errors import ConfigError
from mp_metrics.config.loaders import EnvSettingsLoader, SettingsLoader
from mp_metrics.config.metrics import MetricsSettings
from mp_metrics.logging import get_logger

_log = get_logger(__name__)

_FIELDS = frozenset(f.name for f in dataclasses.fields(MetricsSettings))


class SettingsFactory:
    """Layer loader outputs and explicit overrides into one
    :class:`MetricsSettings`.

    Loaders are applied in order; later loaders win.  A loader whose source
    is unreadable is skipped and logged, but an unusable *value* is a
    :class:`ConfigError`: a pipeline must not start on a setting it silently
    ignored.
    """

    @staticmethod
    def create(
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> MetricsSettings:
        """
        Parameters
        ----------
        loaders:
            Ordered sources; defaults to the process environment only.
        overrides:
            Field values applied last, for tests and local wiring.

        Raises
        ------
        ConfigError
            On an unknown override key or any invalid value.
        """
        merged: dict[str, Any] = {}
        for loader in loaders if loaders is not None else [EnvSettingsLoader()]:
            try:
                merged.update(loader.load())
            except ConfigError:
                raise
            except Exception as exc:  # noqa: BLE001 – unreadable source
                _log.warning("settings.loader_skipped", loader=type(loader).__name__, error=repr(exc))

        unknown = sorted(set(overrides or ()) - _FIELDS)
        if unknown:
            raise ConfigError(f"Unknown metrics settings: {', '.join(unknown)}", detail={"unknown": unknown})
        merged.update(overrides or {})

        settings = MetricsSettings(**merged)
        _log.debug("settings.loaded", push_interval=settings.push_interval, push_enabled=settings.push_enabled)
        return settings


__all__ = ["SettingsFactory"]
