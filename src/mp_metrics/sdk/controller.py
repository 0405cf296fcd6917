"""SDK – PushController, the periodic checkpoint/export scheduler.

Each tick runs observer callbacks, checkpoints the processor and hands the
snapshot to the exporter.  A failed export is logged and dropped; the next
tick proceeds on its own.
"""
from __future__ import annotations

import collections
import dataclasses
import threading
import time
from datetime import datetime, timezone
from typing import Callable

from mp_metrics.export.ports import ExportResult, Pushable
from mp_metrics.kernel.errors import ExportError
from mp_metrics.logging import get_logger
from mp_metrics.sdk.processor import MetricProcessor

_log = get_logger(__name__)

HISTORY_SIZE = 100


@dataclasses.dataclass(frozen=True)
class PushCycleEvent:
    """Outcome of one push cycle."""

    started_at: datetime
    duration_ms: float
    record_count: int
    result: ExportResult
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.result.success


class PushController:
    """Drive ``checkpoint()`` + ``export()`` on a fixed interval.

    Parameters
    ----------
    processor:
        Source of per-period snapshots.
    exporter:
        Push target receiving every snapshot.
    interval:
        Seconds between ticks; fractional values are allowed.
    collect:
        Called at the start of each tick to poll observer instruments.
    flush_on_shutdown:
        Run one last tick inside :meth:`stop`.
    """

    def __init__(
        self,
        processor: MetricProcessor,
        exporter: Pushable,
        interval: float = 60.0,
        *,
        collect: Callable[[], None] | None = None,
        flush_on_shutdown: bool = True,
        name: str = "mp-metrics-push",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"push interval must be > 0, got {interval!r}")
        self._processor = processor
        self._exporter = exporter
        self._interval = float(interval)
        self._collect = collect
        self._flush_on_shutdown = flush_on_shutdown
        self._name = name
        self._wakeup = threading.Event()
        self._state_lock = threading.Lock()
        self._tick_lock = threading.RLock()
        self._thread: threading.Thread | None = None
        self._stopped = False
        self.history: collections.deque[PushCycleEvent] = collections.deque(maxlen=HISTORY_SIZE)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive() and not self._stopped

    @property
    def last_event(self) -> PushCycleEvent | None:
        return self.history[-1] if self.history else None

    def start(self) -> None:
        with self._state_lock:
            if self._stopped or self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()
        _log.info("metrics.push_started", interval=self._interval, exporter=type(self._exporter).__name__)

    def _run(self) -> None:
        while not self._wakeup.wait(self._interval):
            self.tick()

    def tick(self) -> PushCycleEvent:
        """Run one collect/checkpoint/export cycle now."""
        with self._tick_lock:
            started_at = datetime.now(tz=timezone.utc)
            t0 = time.monotonic()
            error: str | None = None

            if self._collect is not None:
                try:
                    self._collect()
                except Exception:  # noqa: BLE001
                    _log.exception("metrics.collect_failed")

            snapshot = self._processor.checkpoint()
            try:
                result = self._exporter.export(snapshot)
            except Exception as exc:  # noqa: BLE001 – exporters should not raise, but may
                err = ExportError(type(self._exporter).__name__, f"exporter raised: {exc!r}", cause=exc)
                _log.error("metrics.export_raised", error=err.to_dict())
                result = ExportResult.FAILURE_NOT_RETRYABLE
                error = err.message
            else:
                if not isinstance(result, ExportResult):
                    _log.error("metrics.export_result_invalid", result=repr(result))
                    result = ExportResult.FAILURE_NOT_RETRYABLE
                    error = "exporter returned no ExportResult"

            if not result.success:
                _log.warning(
                    "metrics.export_failed",
                    exporter=type(self._exporter).__name__,
                    result=result.value,
                    records=len(snapshot),
                )

            event = PushCycleEvent(
                started_at=started_at,
                duration_ms=(time.monotonic() - t0) * 1000,
                record_count=len(snapshot),
                result=result,
                error=error,
            )
            self.history.append(event)
            return event

    def stop(self, timeout: float | None = None) -> None:
        """Stop the timer; no periodic export runs after this returns.

        Safe to call from any thread, including from inside an export, and
        more than once.  In-flight exports are allowed to finish.
        """
        with self._state_lock:
            if self._stopped:
                return
            self._stopped = True
            thread = self._thread
        self._wakeup.set()
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            if thread.is_alive():
                _log.warning("metrics.push_join_timeout", timeout=timeout)
        if self._flush_on_shutdown:
            self.tick()
        _log.info("metrics.push_stopped", flushed=self._flush_on_shutdown)


__all__ = ["PushController", "PushCycleEvent"]
