"""Config – MetricsSettings."""
from __future__ import annotations

import dataclasses
import re
from typing import ClassVar

from mp_metrics.config.errors import InvalidSettingValueError

_NAMESPACE = re.compile(r"[a-zA-Z_:][a-zA-Z0-9_:]*")


@dataclasses.dataclass(frozen=True)
class MetricsSettings:
    """Pipeline settings, read from ``MP_METRICS_*`` environment variables.

    Attributes
    ----------
    push_interval:
        Seconds between push cycles (fractional values allowed).
    flush_on_shutdown:
        Run one last checkpoint/export when the push controller stops.
    namespace:
        Prefix prepended to every exposed Prometheus metric name.
    scrape_path:
        Route on which the Prometheus scrape endpoint is mounted.
    export_endpoint:
        URL for the JSON push exporter; empty disables it.
    export_timeout:
        Per-request timeout of the JSON push exporter, in seconds.
    """

    _prefix: ClassVar[str] = "MP_METRICS"

    push_interval: float = 60.0
    flush_on_shutdown: bool = True
    namespace: str = ""
    scrape_path: str = "/metrics"
    export_endpoint: str = ""
    export_timeout: float = 10.0

    def __post_init__(self) -> None:
        if self.push_interval <= 0:
            raise InvalidSettingValueError("push_interval", self.push_interval, "must be > 0")
        if self.export_timeout <= 0:
            raise InvalidSettingValueError("export_timeout", self.export_timeout, "must be > 0")
        if not self.scrape_path.startswith("/"):
            raise InvalidSettingValueError("scrape_path", self.scrape_path, "must start with '/'")
        if self.namespace and not _NAMESPACE.fullmatch(self.namespace):
            raise InvalidSettingValueError("namespace", self.namespace, "must be a valid Prometheus metric name")
        if self.export_endpoint and not self.export_endpoint.startswith(("http://", "https://")):
            raise InvalidSettingValueError("export_endpoint", self.export_endpoint, "must be an http(s) URL")

    @classmethod
    def env_key(cls, field_name: str) -> str:
        """``push_interval`` -> ``MP_METRICS_PUSH_INTERVAL``."""
        return f"{cls._prefix}_{field_name.upper()}"

    @property
    def push_enabled(self) -> bool:
        return bool(self.export_endpoint)


__all__ = ["MetricsSettings"]
