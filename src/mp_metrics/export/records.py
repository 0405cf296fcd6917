"""Export – aggregation data, MetricRecord and Snapshot value types.

Everything here is immutable once built, so snapshots can be handed to an
exporter or renderer and shared between threads without locking.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from typing import Any, Union

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.ports import InstrumentDescriptor

Number = Union[int, float]


@dataclasses.dataclass(frozen=True)
class SumData:
    """Counter aggregation: running sum."""

    sum: Number = 0

    def merge(self, other: SumData) -> SumData:
        return SumData(self.sum + other.sum)


@dataclasses.dataclass(frozen=True)
class SummaryData:
    """Measure aggregation: sum, count, minimum and maximum."""

    sum: Number
    count: int
    min: Number
    max: Number

    @property
    def mean(self) -> float:
        return self.sum / self.count if self.count else 0.0

    def merge(self, other: SummaryData) -> SummaryData:
        return SummaryData(
            sum=self.sum + other.sum,
            count=self.count + other.count,
            min=min(self.min, other.min),
            max=max(self.max, other.max),
        )


@dataclasses.dataclass(frozen=True)
class LastValueData:
    """Observer aggregation: the most recent observation."""

    value: Number

    def merge(self, other: LastValueData) -> LastValueData:
        return other


AggregationData = Union[SumData, SummaryData, LastValueData]


@dataclasses.dataclass(frozen=True)
class MetricRecord:
    """Aggregate for one (instrument, label set) pair."""

    descriptor: InstrumentDescriptor
    labels: LabelSet
    data: AggregationData

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def key(self) -> tuple[InstrumentDescriptor, LabelSet]:
        return (self.descriptor, self.labels)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Point-in-time, read-only set of metric records."""

    records: tuple[MetricRecord, ...] = ()
    start_time: datetime = dataclasses.field(default_factory=_utcnow)
    end_time: datetime = dataclasses.field(default_factory=_utcnow)

    def __iter__(self) -> Iterator[MetricRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def by_name(self) -> dict[str, list[MetricRecord]]:
        """Group records by instrument name, in first-seen order."""
        grouped: dict[str, list[MetricRecord]] = {}
        for record in self.records:
            grouped.setdefault(record.name, []).append(record)
        return grouped

    def find(
        self, name: str, labels: LabelSet | Mapping[str, Any] | None = None
    ) -> MetricRecord | None:
        wanted = LabelSet.of(labels)
        for record in self.records:
            if record.name == name and record.labels == wanted:
                return record
        return None


__all__ = [
    "AggregationData",
    "LastValueData",
    "MetricRecord",
    "Number",
    "Snapshot",
    "SumData",
    "SummaryData",
]
