"""Export – exporter capability ports.

Push targets (driven by the scheduler) and pull targets (served on scrape)
are separate capabilities; an exporter implements whichever it supports,
or both.
"""
from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable

from mp_metrics.export.records import Snapshot


class ExportResult(str, Enum):
    """Outcome of one export call."""

    SUCCESS = "success"
    FAILURE_RETRYABLE = "failure_retryable"
    FAILURE_NOT_RETRYABLE = "failure_not_retryable"

    @property
    def success(self) -> bool:
        return self is ExportResult.SUCCESS


@runtime_checkable
class Pushable(Protocol):
    """Port: receives checkpoints from the push scheduler.

    ``export`` reports failure through its return value; implementations must
    not let exceptions escape.
    """

    def export(self, snapshot: Snapshot) -> ExportResult: ...
    def shutdown(self) -> None: ...


@runtime_checkable
class Servable(Protocol):
    """Port: renders retained state for a pull request.

    Returns ``(body, content_type)``.
    """

    def render_current_state(self) -> tuple[str, str]: ...


__all__ = ["ExportResult", "Pushable", "Servable"]
