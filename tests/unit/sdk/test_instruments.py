"""Unit tests for SDK instruments – recording, validation, binding."""

from __future__ import annotations

import math

import pytest

from mp_metrics.api import (
    InstrumentDescriptor,
    InstrumentKind,
    LabelSet,
    NoopCounterMetric,
    NoopMeasureMetric,
    NoopObserverMetric,
    NumberKind,
)
from mp_metrics.export import LastValueData, SumData, SummaryData
from mp_metrics.sdk import MeterSdk, UngroupedBatcher
from mp_metrics.sdk.processor import MetricProcessor

L1 = {"dim1": "value1", "dim2": "value1"}
L2 = {"dim1": "value2", "dim2": "value2"}


@pytest.fixture()
def processor() -> UngroupedBatcher:
    return UngroupedBatcher()


@pytest.fixture()
def meter(processor: UngroupedBatcher) -> MeterSdk:
    return MeterSdk("library1", processor)


class _ExplodingProcessor(MetricProcessor):
    def accumulate(self, descriptor, labels, value) -> None:
        raise RuntimeError("boom")

    def checkpoint(self):  # pragma: no cover - never called
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Counters
# ---------------------------------------------------------------------------


class TestCounter:
    def test_sum_of_deltas(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        counter = meter.create_int_counter("requests")
        for delta in (1, 2, 3, 4):
            counter.add(delta, L1)
        record = processor.checkpoint().find("requests", L1)
        assert record is not None
        assert record.data == SumData(10)

    def test_negative_delta_on_monotonic_counter_is_dropped(
        self, meter: MeterSdk, processor: UngroupedBatcher
    ) -> None:
        counter = meter.create_int_counter("requests", monotonic=True)
        counter.add(5, L1)
        counter.add(-3, L1)
        counter.add(2, L1)
        record = processor.checkpoint().find("requests", L1)
        assert record is not None
        assert record.data.sum == 7  # type: ignore[union-attr]

    def test_only_negative_deltas_produce_no_record(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_int_counter("requests").add(-1)
        assert processor.checkpoint().is_empty

    def test_non_monotonic_counter_accepts_negative(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        counter = meter.create_double_counter("balance", monotonic=False)
        counter.add(10.0)
        counter.add(-2.5)
        record = processor.checkpoint().find("balance")
        assert record is not None
        assert record.data.sum == pytest.approx(7.5)  # type: ignore[union-attr]

    def test_double_counter_stores_floats(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_double_counter("bytes").add(3)
        record = processor.checkpoint().find("bytes")
        assert isinstance(record.data.sum, float)  # type: ignore[union-attr]

    def test_int_counter_rejects_float(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        counter = meter.create_int_counter("requests")
        counter.add(1.5)  # type: ignore[arg-type]
        counter.add(True)  # type: ignore[arg-type]
        counter.add("3")  # type: ignore[arg-type]
        assert processor.checkpoint().is_empty

    def test_nan_is_dropped(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_double_counter("x", monotonic=False).add(math.nan)
        assert processor.checkpoint().is_empty

    def test_int_too_large_for_double_is_dropped(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        counter = meter.create_double_counter("bytes")
        counter.add(10**400)
        counter.bind({"dim1": "value1"}).add(10**400)
        meter.create_double_measure("latency").record(10**400)
        counter.add(2)
        snapshot = processor.checkpoint()
        assert len(snapshot) == 1
        assert snapshot.find("bytes").data.sum == 2.0  # type: ignore[union-attr]

    def test_large_int_on_int_counter_is_kept(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_int_counter("big").add(10**400)
        assert processor.checkpoint().find("big").data.sum == 10**400  # type: ignore[union-attr]

    def test_label_sets_are_never_merged(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        counter = meter.create_int_counter("testCounter")
        counter.add(1, L1)
        counter.add(1, L2)
        counter.add(1, {"dim1": "value1"})
        assert len(processor.checkpoint()) == 3

    def test_bound_counter_shares_record_with_unbound_calls(
        self, meter: MeterSdk, processor: UngroupedBatcher
    ) -> None:
        counter = meter.create_int_counter("requests")
        bound = counter.bind({"dim2": "value1", "dim1": "value1"})
        bound.add(100)
        counter.add(10, L1)
        snapshot = processor.checkpoint()
        assert len(snapshot) == 1
        assert snapshot.find("requests", L1).data.sum == 110  # type: ignore[union-attr]

    def test_none_labels_use_empty_set(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_int_counter("requests").add(1)
        record = processor.checkpoint().find("requests")
        assert record is not None
        assert record.labels is LabelSet.EMPTY

    def test_invalid_labels_do_not_raise(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_int_counter("requests").add(1, {1: "x"})  # type: ignore[dict-item]
        assert processor.checkpoint().is_empty

    def test_processor_failure_never_reaches_caller(self) -> None:
        meter = MeterSdk("lib", _ExplodingProcessor())
        meter.create_int_counter("requests").add(1)
        meter.create_int_measure("latency").record(1)


# ---------------------------------------------------------------------------
# Measures
# ---------------------------------------------------------------------------


class TestMeasure:
    def test_summary_of_values(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        measure = meter.create_int_measure("testMeasure")
        for _ in range(10):
            for value in (10, 100, 5, 500):
                measure.record(value, {"dim1": "value1"})
        record = processor.checkpoint().find("testMeasure", {"dim1": "value1"})
        assert record is not None
        assert record.data == SummaryData(sum=6150, count=40, min=5, max=500)

    def test_negative_value_on_absolute_measure_is_dropped(
        self, meter: MeterSdk, processor: UngroupedBatcher
    ) -> None:
        measure = meter.create_double_measure("latency", absolute=True)
        measure.record(2.0)
        measure.record(-1.0)
        record = processor.checkpoint().find("latency")
        assert record.data == SummaryData(sum=2.0, count=1, min=2.0, max=2.0)  # type: ignore[union-attr]

    def test_non_absolute_measure_accepts_negative(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        measure = meter.create_double_measure("temperature", absolute=False)
        measure.record(-4.0)
        measure.record(6.0)
        data = processor.checkpoint().find("temperature").data  # type: ignore[union-attr]
        assert data.min == -4.0  # type: ignore[union-attr]
        assert data.max == 6.0  # type: ignore[union-attr]
        assert data.mean == pytest.approx(1.0)  # type: ignore[union-attr]

    def test_bound_measure(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        bound = meter.create_int_measure("latency").bind(L2)
        bound.record(3)
        bound.record(7)
        data = processor.checkpoint().find("latency", L2).data  # type: ignore[union-attr]
        assert data == SummaryData(sum=10, count=2, min=3, max=7)


# ---------------------------------------------------------------------------
# Observers
# ---------------------------------------------------------------------------


class TestObserver:
    def test_callback_runs_on_collect(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        calls: list[int] = []

        def callback(observer) -> None:
            calls.append(1)
            observer.observe(42, {"queue": "default"})

        meter.create_int_observer("queue_depth", callback)
        assert processor.checkpoint().is_empty
        meter.collect()
        record = processor.checkpoint().find("queue_depth", {"queue": "default"})
        assert calls == [1]
        assert record.data == LastValueData(42)  # type: ignore[union-attr]

    def test_last_observation_wins(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        def callback(observer) -> None:
            observer.observe(1.0)
            observer.observe(3.0)

        meter.create_double_observer("cpu", callback)
        meter.collect()
        assert processor.checkpoint().find("cpu").data == LastValueData(3.0)  # type: ignore[union-attr]

    def test_absolute_observer_drops_negative(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        meter.create_double_observer("cpu", lambda obs: obs.observe(-1.0), absolute=True)
        meter.collect()
        assert processor.checkpoint().is_empty

    def test_failing_callback_does_not_stop_others(self, meter: MeterSdk, processor: UngroupedBatcher) -> None:
        def broken(observer) -> None:
            raise RuntimeError("callback failed")

        meter.create_int_observer("broken", broken)
        meter.create_int_observer("healthy", lambda obs: obs.observe(1))
        meter.collect()
        snapshot = processor.checkpoint()
        assert snapshot.find("broken") is None
        assert snapshot.find("healthy") is not None


# ---------------------------------------------------------------------------
# MeterSdk instrument registry
# ---------------------------------------------------------------------------


class TestMeterRegistry:
    def test_same_name_returns_same_instrument(self, meter: MeterSdk) -> None:
        assert meter.create_int_counter("c") is meter.create_int_counter("c")

    def test_conflicting_definition_returns_noop(self, meter: MeterSdk) -> None:
        meter.create_int_counter("c")
        assert isinstance(meter.create_double_measure("c"), NoopMeasureMetric)
        assert isinstance(meter.create_int_counter("c", monotonic=False), NoopCounterMetric)
        assert isinstance(meter.create_int_observer("c", lambda obs: None), NoopObserverMetric)

    def test_empty_name_returns_noop(self, meter: MeterSdk) -> None:
        assert isinstance(meter.create_int_counter(""), NoopCounterMetric)

    def test_descriptor_carries_identity(self, meter: MeterSdk) -> None:
        counter = meter.create_int_counter("c", monotonic=True)
        assert counter.descriptor == InstrumentDescriptor(  # type: ignore[attr-defined]
            name="c",
            kind=InstrumentKind.COUNTER,
            number_kind=NumberKind.INT,
            monotonic=True,
            absolute=False,
            meter_name="library1",
        )
