"""API – instrument, meter and meter-provider ports."""
from __future__ import annotations

import abc
import dataclasses
import enum
from collections.abc import Mapping
from typing import Any, Callable, Generic, TypeVar

from mp_metrics.api.labels import LabelSet

N = TypeVar("N", int, float)

Labels = LabelSet | Mapping[str, Any] | None


class InstrumentKind(str, enum.Enum):
    COUNTER = "counter"
    MEASURE = "measure"
    OBSERVER = "observer"


class NumberKind(str, enum.Enum):
    INT = "int"
    DOUBLE = "double"


@dataclasses.dataclass(frozen=True)
class InstrumentDescriptor:
    """Identity of an instrument: two descriptors that compare equal
    aggregate into the same records."""

    name: str
    kind: InstrumentKind
    number_kind: NumberKind = NumberKind.DOUBLE
    monotonic: bool = False
    absolute: bool = False
    meter_name: str = ""


class BoundCounterMetric(abc.ABC, Generic[N]):
    """Counter handle with its label set resolved up front."""

    @abc.abstractmethod
    def add(self, value: N) -> None: ...


class BoundMeasureMetric(abc.ABC, Generic[N]):
    """Measure handle with its label set resolved up front."""

    @abc.abstractmethod
    def record(self, value: N) -> None: ...


class CounterMetric(abc.ABC, Generic[N]):
    """Cumulative counter; monotonic counters drop negative deltas."""

    @abc.abstractmethod
    def add(self, value: N, labels: Labels = None) -> None: ...

    @abc.abstractmethod
    def bind(self, labels: Labels = None) -> BoundCounterMetric[N]: ...


class MeasureMetric(abc.ABC, Generic[N]):
    """Instantaneous value contributing to a sum/count/min/max summary."""

    @abc.abstractmethod
    def record(self, value: N, labels: Labels = None) -> None: ...

    @abc.abstractmethod
    def bind(self, labels: Labels = None) -> BoundMeasureMetric[N]: ...


class ObserverMetric(abc.ABC, Generic[N]):
    """Callback-driven instrument, polled once per collection cycle.

    The callback receives the observer and reports values through
    :meth:`observe`.
    """

    @abc.abstractmethod
    def observe(self, value: N, labels: Labels = None) -> None: ...


ObserverCallback = Callable[[ObserverMetric[Any]], None]


class Meter(abc.ABC):
    """Port: factory for instruments and label sets."""

    def get_label_set(self, labels: Mapping[str, Any] | None = None) -> LabelSet:
        return LabelSet.of(labels)

    @abc.abstractmethod
    def create_int_counter(self, name: str, monotonic: bool = True) -> CounterMetric[int]: ...

    @abc.abstractmethod
    def create_double_counter(self, name: str, monotonic: bool = True) -> CounterMetric[float]: ...

    @abc.abstractmethod
    def create_int_measure(self, name: str, absolute: bool = True) -> MeasureMetric[int]: ...

    @abc.abstractmethod
    def create_double_measure(self, name: str, absolute: bool = True) -> MeasureMetric[float]: ...

    @abc.abstractmethod
    def create_int_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[int]: ...

    @abc.abstractmethod
    def create_double_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[float]: ...


class MeterProvider(abc.ABC):
    """Port: hands out one meter per instrumentation library."""

    @abc.abstractmethod
    def get(self, instrumentation_name: str, instrumentation_version: str | None = None) -> Meter: ...


__all__ = [
    "BoundCounterMetric",
    "BoundMeasureMetric",
    "CounterMetric",
    "InstrumentDescriptor",
    "InstrumentKind",
    "Labels",
    "MeasureMetric",
    "Meter",
    "MeterProvider",
    "NumberKind",
    "ObserverCallback",
    "ObserverMetric",
]
