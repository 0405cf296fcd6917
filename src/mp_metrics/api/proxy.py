"""API – ProxyMeter / ProxyMeterProvider (deferred binding).

A proxy starts *unbound*: every instrument it creates is a permanent no-op.
It moves to *bound* at most once, when a real implementation is attached;
later attach calls are ignored.  Factories read the binding at call time and
capture the result in the returned instrument, so instruments created while
unbound are never retroactively rebound.
"""
from __future__ import annotations

import dataclasses
import threading
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.noop import (
    NoopCounterMetric,
    NoopMeasureMetric,
    NoopObserverMetric,
)
from mp_metrics.api.ports import (
    CounterMetric,
    MeasureMetric,
    Meter,
    MeterProvider,
    ObserverCallback,
    ObserverMetric,
)
from mp_metrics.logging import get_logger

_log = get_logger(__name__)

T = TypeVar("T")


class Unbound:
    """Binding state before a real implementation is attached."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Unbound()"


@dataclasses.dataclass(frozen=True)
class Bound(Generic[T]):
    """Binding state once a real implementation is attached."""

    target: T


UNBOUND = Unbound()


class _Binding(Generic[T]):
    """Single check-and-set transition ``Unbound -> Bound(target)``."""

    __slots__ = ("_state", "_lock")

    def __init__(self) -> None:
        self._state: Unbound | Bound[T] = UNBOUND
        self._lock = threading.Lock()

    @property
    def state(self) -> Unbound | Bound[T]:
        return self._state

    def bind(self, target: T) -> bool:
        with self._lock:
            if isinstance(self._state, Bound):
                return False
            self._state = Bound(target)
            return True


class ProxyMeter(Meter):
    """Meter that acts as a no-op until :meth:`attach_real_meter` is called."""

    def __init__(self, name: str = "", version: str | None = None) -> None:
        self.name = name
        self.version = version
        self._binding: _Binding[Meter] = _Binding()

    @property
    def is_bound(self) -> bool:
        return isinstance(self._binding.state, Bound)

    def attach_real_meter(self, real_meter: Meter) -> bool:
        """Bind to *real_meter*; returns ``False`` if already bound."""
        if not self._binding.bind(real_meter):
            _log.debug("metrics.proxy_meter_already_bound", meter=self.name)
            return False
        _log.debug("metrics.proxy_meter_bound", meter=self.name)
        return True

    def _real(self) -> Meter | None:
        state = self._binding.state
        return state.target if isinstance(state, Bound) else None

    def get_label_set(self, labels: Mapping[str, Any] | None = None) -> LabelSet:
        real = self._real()
        return real.get_label_set(labels) if real is not None else LabelSet.of(labels)

    def create_int_counter(self, name: str, monotonic: bool = True) -> CounterMetric[int]:
        real = self._real()
        return real.create_int_counter(name, monotonic) if real is not None else NoopCounterMetric()

    def create_double_counter(self, name: str, monotonic: bool = True) -> CounterMetric[float]:
        real = self._real()
        return real.create_double_counter(name, monotonic) if real is not None else NoopCounterMetric()

    def create_int_measure(self, name: str, absolute: bool = True) -> MeasureMetric[int]:
        real = self._real()
        return real.create_int_measure(name, absolute) if real is not None else NoopMeasureMetric()

    def create_double_measure(self, name: str, absolute: bool = True) -> MeasureMetric[float]:
        real = self._real()
        return real.create_double_measure(name, absolute) if real is not None else NoopMeasureMetric()

    def create_int_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[int]:
        real = self._real()
        if real is None:
            return NoopObserverMetric()
        return real.create_int_observer(name, callback, absolute)

    def create_double_observer(
        self, name: str, callback: ObserverCallback, absolute: bool = True
    ) -> ObserverMetric[float]:
        real = self._real()
        if real is None:
            return NoopObserverMetric()
        return real.create_double_observer(name, callback, absolute)


class ProxyMeterProvider(MeterProvider):
    """Provider that hands out :class:`ProxyMeter` instances.

    Meters obtained before :meth:`attach_real_provider` are bound to the real
    provider's meters at attach time; instruments they created earlier stay
    no-op.
    """

    def __init__(self) -> None:
        self._binding: _Binding[MeterProvider] = _Binding()
        self._meters: dict[tuple[str, str | None], ProxyMeter] = {}
        self._lock = threading.Lock()

    @property
    def is_bound(self) -> bool:
        return isinstance(self._binding.state, Bound)

    def get(self, instrumentation_name: str, instrumentation_version: str | None = None) -> Meter:
        key = (instrumentation_name, instrumentation_version)
        with self._lock:
            meter = self._meters.get(key)
            if meter is None:
                meter = ProxyMeter(instrumentation_name, instrumentation_version)
                self._meters[key] = meter
                state = self._binding.state
                if isinstance(state, Bound):
                    meter.attach_real_meter(state.target.get(instrumentation_name, instrumentation_version))
            return meter

    def attach_real_provider(self, real_provider: MeterProvider) -> bool:
        """Bind to *real_provider*; only the first call has any effect."""
        if real_provider is self:
            raise ValueError("a proxy provider cannot be bound to itself")
        with self._lock:
            if not self._binding.bind(real_provider):
                _log.debug("metrics.proxy_provider_already_bound")
                return False
            pending = list(self._meters.values())
        for meter in pending:
            meter.attach_real_meter(real_provider.get(meter.name, meter.version))
        _log.info("metrics.proxy_provider_bound", provider=type(real_provider).__name__, meters=len(pending))
        return True


__all__ = ["UNBOUND", "Bound", "ProxyMeter", "ProxyMeterProvider", "Unbound"]
