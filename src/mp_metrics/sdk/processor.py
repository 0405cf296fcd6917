"""SDK – MetricProcessor port and the ungrouped batcher.

The batcher keeps exactly one aggregation cell per distinct
(instrument, label set) pair; label sets are never merged, even when they
share keys.

Synchronization: the table lock is held only to insert a new cell or to swap
the live table out during a checkpoint.  Updates take the cell's own lock.
A checkpoint swaps in an empty table first, then seals every retired cell;
an update that reaches a sealed cell retries on the live table, so each
accumulation lands in exactly one period.
"""
from __future__ import annotations

import abc
import threading
from datetime import datetime, timezone

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.ports import InstrumentDescriptor
from mp_metrics.export.records import MetricRecord, Number, Snapshot
from mp_metrics.sdk.aggregations import AggregationCell, cell_for

_Key = tuple[InstrumentDescriptor, LabelSet]


class MetricProcessor(abc.ABC):
    """Port: accumulate recordings and hand out per-period checkpoints."""

    @abc.abstractmethod
    def accumulate(self, descriptor: InstrumentDescriptor, labels: LabelSet, value: Number) -> None: ...

    @abc.abstractmethod
    def checkpoint(self) -> Snapshot:
        """Return everything accumulated since the last checkpoint and start
        a new, empty period."""


class UngroupedBatcher(MetricProcessor):
    """One aggregation record per (instrument, label set); no grouping."""

    def __init__(self) -> None:
        self._table: dict[_Key, AggregationCell] = {}
        self._table_lock = threading.Lock()
        self._period_start = datetime.now(timezone.utc)

    def __len__(self) -> int:
        return len(self._table)

    def accumulate(self, descriptor: InstrumentDescriptor, labels: LabelSet, value: Number) -> None:
        key = (descriptor, labels)
        while True:
            cell = self._table.get(key)
            if cell is None:
                with self._table_lock:
                    cell = self._table.get(key)
                    if cell is None:
                        cell = cell_for(descriptor)
                        self._table[key] = cell
            if cell.update(value):
                return

    def checkpoint(self) -> Snapshot:
        with self._table_lock:
            retired, self._table = self._table, {}
            end = datetime.now(timezone.utc)
            start, self._period_start = self._period_start, end

        records: list[MetricRecord] = []
        for (descriptor, labels), cell in retired.items():
            data = cell.seal()
            if data is not None:
                records.append(MetricRecord(descriptor=descriptor, labels=labels, data=data))
        return Snapshot(records=tuple(records), start_time=start, end_time=end)


__all__ = ["MetricProcessor", "UngroupedBatcher"]
