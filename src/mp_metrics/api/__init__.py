"""API – label sets, instrument ports, no-op and proxy implementations."""
from mp_metrics.api.global_provider import get_meter, get_meter_provider, set_meter_provider
from mp_metrics.api.labels import LabelSet
from mp_metrics.api.noop import (
    NoopCounterMetric,
    NoopMeasureMetric,
    NoopMeter,
    NoopMeterProvider,
    NoopObserverMetric,
)
from mp_metrics.api.ports import (
    BoundCounterMetric,
    BoundMeasureMetric,
    CounterMetric,
    InstrumentDescriptor,
    InstrumentKind,
    Labels,
    MeasureMetric,
    Meter,
    MeterProvider,
    NumberKind,
    ObserverCallback,
    ObserverMetric,
)
from mp_metrics.api.proxy import Bound, ProxyMeter, ProxyMeterProvider, Unbound

__all__ = [
    "Bound",
    "BoundCounterMetric",
    "BoundMeasureMetric",
    "CounterMetric",
    "InstrumentDescriptor",
    "InstrumentKind",
    "LabelSet",
    "Labels",
    "MeasureMetric",
    "Meter",
    "MeterProvider",
    "NoopCounterMetric",
    "NoopMeasureMetric",
    "NoopMeter",
    "NoopMeterProvider",
    "NoopObserverMetric",
    "NumberKind",
    "ObserverCallback",
    "ObserverMetric",
    "ProxyMeter",
    "ProxyMeterProvider",
    "Unbound",
    "get_meter",
    "get_meter_provider",
    "set_meter_provider",
]
