"""SDK – per-record aggregation cells.

A cell accumulates values for one (instrument, label set) key during one
period.  ``update`` and ``seal`` serialize on the cell's own lock; once a
cell is sealed by a checkpoint it refuses further updates, and the caller
retries against the next period's table.
"""
from __future__ import annotations

import abc
import threading

from mp_metrics.api.ports import InstrumentDescriptor, InstrumentKind
from mp_metrics.export.records import (
    AggregationData,
    LastValueData,
    Number,
    SumData,
    SummaryData,
)


class AggregationCell(abc.ABC):
    """Mutable accumulator guarded by its own lock."""

    __slots__ = ("_lock", "_sealed", "_updates")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sealed = False
        self._updates = 0

    @abc.abstractmethod
    def _apply(self, value: Number) -> None: ...

    @abc.abstractmethod
    def _data(self) -> AggregationData: ...

    def update(self, value: Number) -> bool:
        """Fold *value* in; returns ``False`` if the cell was already sealed."""
        with self._lock:
            if self._sealed:
                return False
            self._apply(value)
            self._updates += 1
            return True

    def seal(self) -> AggregationData | None:
        """Close the cell and return its data (``None`` if never updated)."""
        with self._lock:
            self._sealed = True
            if not self._updates:
                return None
            return self._data()


class SumCell(AggregationCell):
    __slots__ = ("_sum",)

    def __init__(self) -> None:
        super().__init__()
        self._sum: Number = 0

    def _apply(self, value: Number) -> None:
        self._sum += value

    def _data(self) -> SumData:
        return SumData(self._sum)


class SummaryCell(AggregationCell):
    __slots__ = ("_sum", "_count", "_min", "_max")

    def __init__(self) -> None:
        super().__init__()
        self._sum: Number = 0
        self._count = 0
        self._min: Number | None = None
        self._max: Number | None = None

    def _apply(self, value: Number) -> None:
        self._sum += value
        self._count += 1
        if self._min is None or value < self._min:
            self._min = value
        if self._max is None or value > self._max:
            self._max = value

    def _data(self) -> SummaryData:
        # only reached after at least one update, so min/max are set
        return SummaryData(sum=self._sum, count=self._count, min=self._min, max=self._max)  # type: ignore[arg-type]


class LastValueCell(AggregationCell):
    __slots__ = ("_value",)

    def __init__(self) -> None:
        super().__init__()
        self._value: Number = 0

    def _apply(self, value: Number) -> None:
        self._value = value

    def _data(self) -> LastValueData:
        return LastValueData(self._value)


_CELLS: dict[InstrumentKind, type[AggregationCell]] = {
    InstrumentKind.COUNTER: SumCell,
    InstrumentKind.MEASURE: SummaryCell,
    InstrumentKind.OBSERVER: LastValueCell,
}


def cell_for(descriptor: InstrumentDescriptor) -> AggregationCell:
    return _CELLS[descriptor.kind]()


__all__ = ["AggregationCell", "LastValueCell", "SumCell", "SummaryCell", "cell_for"]
