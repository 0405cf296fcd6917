"""SDK – real instruments, meters, aggregation and push scheduling."""
from mp_metrics.sdk.aggregations import AggregationCell, LastValueCell, SumCell, SummaryCell
from mp_metrics.sdk.controller import PushController, PushCycleEvent
from mp_metrics.sdk.instruments import (
    BoundCounterSdk,
    BoundMeasureSdk,
    CounterSdk,
    MeasureSdk,
    ObserverSdk,
)
from mp_metrics.sdk.meter import MeterSdk
from mp_metrics.sdk.processor import MetricProcessor, UngroupedBatcher
from mp_metrics.sdk.provider import MeterProviderSdk

__all__ = [
    "AggregationCell",
    "BoundCounterSdk",
    "BoundMeasureSdk",
    "CounterSdk",
    "LastValueCell",
    "MeasureSdk",
    "MeterProviderSdk",
    "MeterSdk",
    "MetricProcessor",
    "ObserverSdk",
    "PushController",
    "PushCycleEvent",
    "SumCell",
    "SummaryCell",
    "UngroupedBatcher",
]
