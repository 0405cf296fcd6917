"""Prometheus – text exposition format (version 0.0.4) renderer.

Counters render as ``counter``; measures as ``summary`` with ``_sum`` and
``_count`` series plus ``quantile="0"`` (minimum) and ``quantile="1"``
(maximum); observers as ``gauge``.  No other quantiles are computed.

A user label named ``quantile`` is dropped from summaries; the synthetic
one always wins.
"""
from __future__ import annotations

import math
import re

from mp_metrics.api.labels import LabelSet
from mp_metrics.api.ports import InstrumentKind
from mp_metrics.export.records import (
    AggregationData,
    LastValueData,
    Number,
    Snapshot,
    SumData,
    SummaryData,
)
from mp_metrics.logging import get_logger

_log = get_logger(__name__)

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"

_TYPE_NAMES: dict[InstrumentKind, str] = {
    InstrumentKind.COUNTER: "counter",
    InstrumentKind.MEASURE: "summary",
    InstrumentKind.OBSERVER: "gauge",
}

_INVALID_METRIC_CHARS = re.compile(r"[^a-zA-Z0-9_:]")
_INVALID_LABEL_CHARS = re.compile(r"[^a-zA-Z0-9_]")
_SUMMARY_RESERVED = ("quantile",)

# Largest float magnitude whose integral values print exactly as integers.
_EXACT_INT_LIMIT = 2**53


def sanitize_metric_name(name: str) -> str:
    cleaned = _INVALID_METRIC_CHARS.sub("_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def sanitize_label_name(name: str) -> str:
    cleaned = _INVALID_LABEL_CHARS.sub("_", name)
    if not cleaned or cleaned[0].isdigit():
        cleaned = "_" + cleaned
    return cleaned


def escape_label_value(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def format_value(value: Number) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < _EXACT_INT_LIMIT:
        return str(int(value))
    return repr(value)


def label_pairs(labels: LabelSet, reserved: tuple[str, ...] = ()) -> tuple[tuple[str, str], ...]:
    """Sanitized, escaped label pairs sorted by name.

    Names in *reserved* are dropped; when two keys sanitize to the same name
    the first one (in key order) is kept.
    """
    pairs: dict[str, str] = {}
    for key, value in labels.pairs:
        name = sanitize_label_name(key)
        if name in reserved or name in pairs:
            continue
        pairs[name] = escape_label_value(value)
    return tuple(sorted(pairs.items()))


def label_block(pairs: tuple[tuple[str, str], ...], *extra: tuple[str, str]) -> str:
    items = list(pairs)
    items.extend(extra)
    if not items:
        return ""
    return "{" + ",".join(f'{k}="{v}"' for k, v in items) + "}"


_Family = tuple[InstrumentKind, dict[tuple[tuple[str, str], ...], AggregationData]]


def _families(snapshot: Snapshot, namespace: str | None) -> dict[str, _Family]:
    """Group records by exposed name, merging samples that collide.

    Records from different meters, or whose names only match after
    sanitizing, share one family.  Same-kind samples with equal labels are
    merged; a record whose kind differs from the family's is left out.
    """
    families: dict[str, _Family] = {}
    for record in snapshot:
        kind = record.descriptor.kind
        metric = sanitize_metric_name(f"{namespace}_{record.name}" if namespace else record.name)
        family = families.setdefault(metric, (kind, {}))
        if family[0] is not kind:
            _log.warning(
                "metrics.render_type_conflict",
                metric=metric,
                meter=record.descriptor.meter_name,
                kept=family[0].value,
                dropped=kind.value,
            )
            continue
        reserved = _SUMMARY_RESERVED if kind is InstrumentKind.MEASURE else ()
        pairs = label_pairs(record.labels, reserved)
        samples = family[1]
        previous = samples.get(pairs)
        if previous is not None and type(previous) is type(record.data):
            samples[pairs] = previous.merge(record.data)  # type: ignore[arg-type]
        else:
            samples[pairs] = record.data
    return families


def render(snapshot: Snapshot, namespace: str | None = None) -> str:
    """Serialize *snapshot*; an empty snapshot yields an empty body."""
    lines: list[str] = []
    for metric, (kind, samples) in _families(snapshot, namespace).items():
        lines.append(f"# TYPE {metric} {_TYPE_NAMES[kind]}")
        for pairs, data in samples.items():
            if isinstance(data, SumData):
                lines.append(f"{metric}{label_block(pairs)} {format_value(data.sum)}")
            elif isinstance(data, SummaryData):
                block = label_block(pairs)
                lines.append(f"{metric}_sum{block} {format_value(data.sum)}")
                lines.append(f"{metric}_count{block} {format_value(data.count)}")
                lines.append(f"{metric}{label_block(pairs, ('quantile', '0'))} {format_value(data.min)}")
                lines.append(f"{metric}{label_block(pairs, ('quantile', '1'))} {format_value(data.max)}")
            elif isinstance(data, LastValueData):
                lines.append(f"{metric}{label_block(pairs)} {format_value(data.value)}")
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


__all__ = [
    "CONTENT_TYPE",
    "escape_label_value",
    "format_value",
    "label_block",
    "label_pairs",
    "render",
    "sanitize_label_name",
    "sanitize_metric_name",
]
