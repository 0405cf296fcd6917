"""API – no-op instruments, meter and meter provider."""
from __future__ import annotations

from typing import Any

from mp_metrics.api.ports import (
    BoundCounterMetric,
    BoundMeasureMetric,
    CounterMetric,
    Labels,
    MeasureMetric,
    Meter,
    MeterProvider,
    ObserverCallback,
    ObserverMetric,
)


class _NoopBoundCounter(BoundCounterMetric[Any]):
    def add(self, value: Any) -> None:
        pass


class _NoopBoundMeasure(BoundMeasureMetric[Any]):
    def record(self, value: Any) -> None:
        pass


class NoopCounterMetric(CounterMetric[Any]):
    def add(self, value: Any, labels: Labels = None) -> None:
        pass

    def bind(self, labels: Labels = None) -> BoundCounterMetric[Any]:
        return _NoopBoundCounter()


class NoopMeasureMetric(MeasureMetric[Any]):
    def record(self, value: Any, labels: Labels = None) -> None:
        pass

    def bind(self, labels: Labels = None) -> BoundMeasureMetric[Any]:
        return _NoopBoundMeasure()


class NoopObserverMetric(ObserverMetric[Any]):
    def observe(self, value: Any, labels: Labels = None) -> None:
        pass


class NoopMeter(Meter):
    """Silent meter (used while no backend is attached, and in tests)."""

    def create_int_counter(self, name: str, monotonic: bool = True) -> CounterMetric[int]:
        return NoopCounterMetric()

    def create_double_counter(self, name: str, monotonic: bool = True) -> CounterMetric[float]:
        return NoopCounterMetric()

    def create_int_measure(self, name: str, absolute: bool = True) -> MeasureMetric[int]:
        return NoopMeasureMetric()

    def create_double_measure(self, name: str, absolute: bool = True) -> MeasureMetric[float]:
        return NoopMeasureMetric()

    def create_int_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[int]:
        return NoopObserverMetric()

    def create_double_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[float]:
        return NoopObserverMetric()


class NoopMeterProvider(MeterProvider):
    """Provider whose meters discard everything."""

    _meter = NoopMeter()

    def get(self, instrumentation_name: str, instrumentation_version: str | None = None) -> Meter:
        return self._meter


__all__ = [
    "NoopCounterMetric",
    "NoopMeasureMetric",
    "NoopMeter",
    "NoopMeterProvider",
    "NoopObserverMetric",
]
