"""Prometheus – PrometheusExporter (push target + pull endpoint).

The push scheduler feeds checkpoints in through :meth:`export`; they are
merged into cumulative retained state that scrapes never reset.  After each
merge an immutable snapshot is published, and every render reads the most
recently published one.
"""
from __future__ import annotations

import dataclasses
import threading
from typing import TYPE_CHECKING

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.ports import InstrumentDescriptor
from mp_metrics.export.ports import ExportResult
from mp_metrics.export.records import MetricRecord, Snapshot
from mp_metrics.exporters.prometheus.render import CONTENT_TYPE, render
from mp_metrics.logging import get_logger

if TYPE_CHECKING:
    from mp_metrics.config import MetricsSettings

_log = get_logger(__name__)


@dataclasses.dataclass(frozen=True)
class PrometheusExporterOptions:
    """Options for :class:`PrometheusExporter`.

    ``namespace`` is prepended (``<namespace>_<name>``) to every metric.
    """

    namespace: str = ""


class PrometheusExporter:
    """Retains pushed aggregates and serves them in text exposition format."""

    def __init__(self, options: PrometheusExporterOptions | None = None) -> None:
        self.options = options or PrometheusExporterOptions()
        self._lock = threading.Lock()
        self._retained: dict[tuple[InstrumentDescriptor, LabelSet], MetricRecord] = {}
        self._published = Snapshot()

    @classmethod
    def from_settings(cls, settings: MetricsSettings) -> PrometheusExporter:
        return cls(PrometheusExporterOptions(namespace=settings.namespace))

    def export(self, snapshot: Snapshot) -> ExportResult:
        try:
            with self._lock:
                for record in snapshot:
                    previous = self._retained.get(record.key)
                    if previous is not None and type(previous.data) is type(record.data):
                        record = MetricRecord(
                            descriptor=record.descriptor,
                            labels=record.labels,
                            data=previous.data.merge(record.data),  # type: ignore[arg-type]
                        )
                    self._retained[record.key] = record
                self._published = Snapshot(
                    records=tuple(self._retained.values()),
                    start_time=self._published.start_time if self._published.records else snapshot.start_time,
                    end_time=snapshot.end_time,
                )
        except Exception:  # noqa: BLE001 – export reports failure as a value
            _log.exception("metrics.prometheus_export_failed", records=len(snapshot))
            return ExportResult.FAILURE_NOT_RETRYABLE
        return ExportResult.SUCCESS

    def current_snapshot(self) -> Snapshot:
        """The last published (immutable) retained state."""
        return self._published

    def render_current_state(self) -> tuple[str, str]:
        return render(self._published, self.options.namespace or None), CONTENT_TYPE

    def shutdown(self) -> None:
        _log.debug("metrics.prometheus_exporter_shutdown", retained=len(self._retained))


__all__ = ["PrometheusExporter", "PrometheusExporterOptions"]
