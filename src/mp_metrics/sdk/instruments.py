"""SDK – instruments that forward recordings to a MetricProcessor.

Recording never raises: invalid values (negative delta on a monotonic
counter, negative value on an absolute measure or observer, NaN, or the
wrong number type) are dropped and logged at debug level, and any
unexpected failure on the recording path is logged and swallowed.
"""
from __future__ import annotations

import math
from typing import Any

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.ports import (
    BoundCounterMetric,
    BoundMeasureMetric,
    CounterMetric,
    InstrumentDescriptor,
    InstrumentKind,
    Labels,
    MeasureMetric,
    NumberKind,
    ObserverCallback,
    ObserverMetric,
)
from mp_metrics.logging import get_logger
from mp_metrics.sdk.processor import MetricProcessor

_log = get_logger(__name__)


class _Recorder:
    """Validation and forwarding shared by every SDK instrument."""

    def __init__(self, descriptor: InstrumentDescriptor, processor: MetricProcessor) -> None:
        self.descriptor = descriptor
        self._processor = processor

    @property
    def name(self) -> str:
        return self.descriptor.name

    def _rejection(self, value: Any) -> str | None:
        d = self.descriptor
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return "not_a_number"
        if d.number_kind is NumberKind.INT and not isinstance(value, int):
            return "not_an_int"
        if isinstance(value, float) and math.isnan(value):
            return "nan"
        if value < 0:
            if d.kind is InstrumentKind.COUNTER and d.monotonic:
                return "negative_delta_on_monotonic_counter"
            if d.kind is not InstrumentKind.COUNTER and d.absolute:
                return "negative_value_on_absolute_instrument"
        return None

    def _submit(self, value: Any, labels: LabelSet) -> None:
        reason = self._rejection(value)
        if reason is not None:
            _log.debug("metrics.recording_rejected", instrument=self.name, value=value, reason=reason)
            return
        if self.descriptor.number_kind is NumberKind.DOUBLE:
            try:
                value = float(value)
            except OverflowError:
                _log.debug("metrics.recording_rejected", instrument=self.name, reason="overflow")
                return
        try:
            self._processor.accumulate(self.descriptor, labels, value)
        except Exception:  # noqa: BLE001 – recording must not reach the caller
            _log.exception("metrics.recording_failed", instrument=self.name)

    def _submit_raw(self, value: Any, labels: Labels) -> None:
        try:
            label_set = LabelSet.of(labels)
        except (TypeError, AttributeError) as exc:
            _log.debug("metrics.recording_rejected", instrument=self.name, reason="invalid_labels", error=str(exc))
            return
        self._submit(value, label_set)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class BoundCounterSdk(BoundCounterMetric[Any]):
    __slots__ = ("_counter", "labels")

    def __init__(self, counter: CounterSdk, labels: LabelSet) -> None:
        self._counter = counter
        self.labels = labels

    def add(self, value: Any) -> None:
        self._counter._submit(value, self.labels)


class BoundMeasureSdk(BoundMeasureMetric[Any]):
    __slots__ = ("_measure", "labels")

    def __init__(self, measure: MeasureSdk, labels: LabelSet) -> None:
        self._measure = measure
        self.labels = labels

    def record(self, value: Any) -> None:
        self._measure._submit(value, self.labels)


class CounterSdk(_Recorder, CounterMetric[Any]):
    def add(self, value: Any, labels: Labels = None) -> None:
        self._submit_raw(value, labels)

    def bind(self, labels: Labels = None) -> BoundCounterMetric[Any]:
        return BoundCounterSdk(self, LabelSet.of(labels))


class MeasureSdk(_Recorder, MeasureMetric[Any]):
    def record(self, value: Any, labels: Labels = None) -> None:
        self._submit_raw(value, labels)

    def bind(self, labels: Labels = None) -> BoundMeasureMetric[Any]:
        return BoundMeasureSdk(self, LabelSet.of(labels))


class ObserverSdk(_Recorder, ObserverMetric[Any]):
    """Observer whose callback is polled by :meth:`run_callback`."""

    def __init__(
        self,
        descriptor: InstrumentDescriptor,
        processor: MetricProcessor,
        callback: ObserverCallback,
    ) -> None:
        super().__init__(descriptor, processor)
        self._callback = callback

    def observe(self, value: Any, labels: Labels = None) -> None:
        self._submit_raw(value, labels)

    def run_callback(self) -> None:
        try:
            self._callback(self)
        except Exception:  # noqa: BLE001
            _log.exception("metrics.observer_callback_failed", instrument=self.name)


__all__ = [
    "BoundCounterSdk",
    "BoundMeasureSdk",
    "CounterSdk",
    "MeasureSdk",
    "ObserverSdk",
]
