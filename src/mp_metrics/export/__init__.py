"""Export – snapshot value types and exporter capability ports."""
from mp_metrics.export.ports import ExportResult, Pushable, Servable
from mp_metrics.export.records import (
    AggregationData,
    LastValueData,
    MetricRecord,
    Number,
    Snapshot,
    SumData,
    SummaryData,
)

__all__ = [
    "AggregationData",
    "ExportResult",
    "LastValueData",
    "MetricRecord",
    "Number",
    "Pushable",
    "Servable",
    "Snapshot",
    "SumData",
    "SummaryData",
]
