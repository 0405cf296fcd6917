"""SDK – MeterProviderSdk."""
from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from mp_metrics.api.ports import MeterProvider
from mp_metrics.export.ports import Pushable
from mp_metrics.exporters.http import HttpJsonExporter
from mp_metrics.logging import get_logger
from mp_metrics.sdk.controller import PushController, PushCycleEvent
from mp_metrics.sdk.meter import MeterSdk
from mp_metrics.sdk.processor import MetricProcessor, UngroupedBatcher

if TYPE_CHECKING:
    from mp_metrics.config import MetricsSettings

_log = get_logger(__name__)


class MeterProviderSdk(MeterProvider):
    """Real meter provider: one :class:`MeterSdk` per instrumentation library,
    all feeding a shared processor.

    When *exporter* is given, a :class:`PushController` starts immediately and
    pushes a checkpoint every *push_interval* seconds.

    Example::

        exporter = PrometheusExporter()
        provider = MeterProviderSdk(exporter=exporter, push_interval=5.0)
        set_meter_provider(provider)
        ...
        provider.shutdown()
    """

    def __init__(
        self,
        processor: MetricProcessor | None = None,
        exporter: Pushable | None = None,
        push_interval: float = 60.0,
        *,
        flush_on_shutdown: bool = True,
    ) -> None:
        self.processor = processor or UngroupedBatcher()
        self.exporter = exporter
        self._meters: dict[tuple[str, str | None], MeterSdk] = {}
        self._lock = threading.Lock()
        self._shutdown = False
        self._controller: PushController | None = None
        if exporter is not None:
            self._controller = PushController(
                self.processor,
                exporter,
                push_interval,
                collect=self.collect,
                flush_on_shutdown=flush_on_shutdown,
            )
            self._controller.start()

    @classmethod
    def from_settings(
        cls,
        settings: MetricsSettings,
        exporter: Pushable | None = None,
        processor: MetricProcessor | None = None,
    ) -> MeterProviderSdk:
        """Build a provider from *settings*.

        Without an explicit *exporter*, a non-empty ``export_endpoint`` selects
        an :class:`~mp_metrics.exporters.http.HttpJsonExporter` using
        ``export_timeout``; an explicit exporter always wins.
        """
        if exporter is None and settings.push_enabled:
            exporter = HttpJsonExporter(settings.export_endpoint, timeout=settings.export_timeout)
        elif exporter is not None and settings.push_enabled:
            _log.warning(
                "metrics.export_endpoint_ignored",
                endpoint=settings.export_endpoint,
                exporter=type(exporter).__name__,
            )
        return cls(
            processor=processor,
            exporter=exporter,
            push_interval=settings.push_interval,
            flush_on_shutdown=settings.flush_on_shutdown,
        )

    @property
    def controller(self) -> PushController | None:
        return self._controller

    def get(self, instrumentation_name: str, instrumentation_version: str | None = None) -> MeterSdk:
        key = (instrumentation_name, instrumentation_version)
        with self._lock:
            meter = self._meters.get(key)
            if meter is None:
                meter = MeterSdk(instrumentation_name, self.processor, instrumentation_version)
                self._meters[key] = meter
            return meter

    def collect(self) -> None:
        """Poll the observers of every meter once."""
        with self._lock:
            meters = list(self._meters.values())
        for meter in meters:
            meter.collect()

    def force_flush(self) -> PushCycleEvent | None:
        """Push immediately instead of waiting for the next tick."""
        if self._controller is None:
            return None
        return self._controller.tick()

    def shutdown(self, timeout: float | None = None) -> None:
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
        if self._controller is not None:
            self._controller.stop(timeout)
        if self.exporter is not None:
            try:
                self.exporter.shutdown()
            except Exception:  # noqa: BLE001
                _log.exception("metrics.exporter_shutdown_failed", exporter=type(self.exporter).__name__)


__all__ = ["MeterProviderSdk"]
