"""SDK – MeterSdk."""
from __future__ import annotations

import threading
from typing import Any, Callable

from mp_metrics.api.noop import NoopCounterMetric, NoopMeasureMetric, NoopObserverMetric
from mp_metrics.api.ports import (
    CounterMetric,
    InstrumentDescriptor,
    InstrumentKind,
    MeasureMetric,
    Meter,
    NumberKind,
    ObserverCallback,
    ObserverMetric,
)
from mp_metrics.logging import get_logger
from mp_metrics.sdk.instruments import CounterSdk, MeasureSdk, ObserverSdk, _Recorder
from mp_metrics.sdk.processor import MetricProcessor

_log = get_logger(__name__)


class MeterSdk(Meter):
    """Meter that creates real instruments feeding *processor*.

    Instruments are created once per name and reused.  Asking again for a
    name with a different kind or flags logs a warning and returns a no-op
    instrument; the first definition keeps the name.
    """

    def __init__(self, name: str, processor: MetricProcessor, version: str | None = None) -> None:
        self.name = name
        self.version = version
        self._processor = processor
        self._instruments: dict[str, _Recorder] = {}
        self._observers: list[ObserverSdk] = []
        self._lock = threading.Lock()

    def _instrument(
        self,
        descriptor: InstrumentDescriptor,
        factory: Callable[[], _Recorder],
    ) -> _Recorder | None:
        if not descriptor.name:
            _log.warning("metrics.instrument_name_empty", meter=self.name)
            return None
        with self._lock:
            existing = self._instruments.get(descriptor.name)
            if existing is not None:
                if existing.descriptor == descriptor:
                    return existing
                _log.warning(
                    "metrics.instrument_conflict",
                    meter=self.name,
                    instrument=descriptor.name,
                    existing=existing.descriptor.kind.value,
                    requested=descriptor.kind.value,
                )
                return None
            instrument = factory()
            self._instruments[descriptor.name] = instrument
            if isinstance(instrument, ObserverSdk):
                self._observers.append(instrument)
            return instrument

    def _descriptor(self, name: str, kind: InstrumentKind, number_kind: NumberKind, **flags: bool) -> InstrumentDescriptor:
        return InstrumentDescriptor(name=name, kind=kind, number_kind=number_kind, meter_name=self.name, **flags)

    def _counter(self, name: str, number_kind: NumberKind, monotonic: bool) -> CounterMetric[Any]:
        descriptor = self._descriptor(name, InstrumentKind.COUNTER, number_kind, monotonic=monotonic)
        instrument = self._instrument(descriptor, lambda: CounterSdk(descriptor, self._processor))
        return instrument if isinstance(instrument, CounterSdk) else NoopCounterMetric()

    def _measure(self, name: str, number_kind: NumberKind, absolute: bool) -> MeasureMetric[Any]:
        descriptor = self._descriptor(name, InstrumentKind.MEASURE, number_kind, absolute=absolute)
        instrument = self._instrument(descriptor, lambda: MeasureSdk(descriptor, self._processor))
        return instrument if isinstance(instrument, MeasureSdk) else NoopMeasureMetric()

    def _observer(
        self, name: str, number_kind: NumberKind, callback: ObserverCallback, absolute: bool
    ) -> ObserverMetric[Any]:
        descriptor = self._descriptor(name, InstrumentKind.OBSERVER, number_kind, absolute=absolute)
        instrument = self._instrument(descriptor, lambda: ObserverSdk(descriptor, self._processor, callback))
        return instrument if isinstance(instrument, ObserverSdk) else NoopObserverMetric()

    def create_int_counter(self, name: str, monotonic: bool = True) -> CounterMetric[int]:
        return self._counter(name, NumberKind.INT, monotonic)

    def create_double_counter(self, name: str, monotonic: bool = True) -> CounterMetric[float]:
        return self._counter(name, NumberKind.DOUBLE, monotonic)

    def create_int_measure(self, name: str, absolute: bool = True) -> MeasureMetric[int]:
        return self._measure(name, NumberKind.INT, absolute)

    def create_double_measure(self, name: str, absolute: bool = True) -> MeasureMetric[float]:
        return self._measure(name, NumberKind.DOUBLE, absolute)

    def create_int_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[int]:
        return self._observer(name, NumberKind.INT, callback, absolute)

    def create_double_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[float]:
        return self._observer(name, NumberKind.DOUBLE, callback, absolute)

    def collect(self) -> None:
        """Run every observer callback once."""
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer.run_callback()

    def __repr__(self) -> str:
        return f"MeterSdk(name={self.name!r}, version={self.version!r})"


__all__ = ["MeterSdk"]
