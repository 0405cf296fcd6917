"""HTTP exporter – HttpJsonExporter (requires the ``httpx`` extra)."""
from __future__ import annotations

import dataclasses
from typing import Any

from mp_metrics.export.ports import ExportResult
from mp_metrics.export.records import Snapshot
from mp_metrics.kernel.errors import ExportError
from mp_metrics.logging import get_logger

_log = get_logger(__name__)

_EXPORTER_NAME = "http_json"


def _require_httpx() -> Any:
    try:
        import httpx  # type: ignore[import-untyped]
        return httpx
    except ImportError as exc:
        raise ImportError("Install 'mp-metrics[httpx]' to use the HTTP exporter") from exc


def encode_snapshot(snapshot: Snapshot) -> dict[str, Any]:
    """Generic JSON document for one snapshot."""
    metrics: list[dict[str, Any]] = []
    for record in snapshot:
        d = record.descriptor
        metrics.append(
            {
                "name": d.name,
                "kind": d.kind.value,
                "number_kind": d.number_kind.value,
                "meter": d.meter_name,
                "labels": record.labels.as_dict(),
                "aggregation": type(record.data).__name__,
                **dataclasses.asdict(record.data),
            }
        )
    return {
        "start_time": snapshot.start_time.isoformat(),
        "end_time": snapshot.end_time.isoformat(),
        "metrics": metrics,
    }


class HttpJsonExporter:
    """POST every snapshot as JSON to *endpoint*.

    Failures are logged and returned as :class:`ExportResult` values:
    transport errors, 429 and 5xx are retryable, other 4xx are not.  There
    is no retry inside a cycle; the next push starts fresh.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10.0,
        headers: dict[str, str] | None = None,
        client: Any | None = None,
    ) -> None:
        httpx = _require_httpx()
        self._endpoint = endpoint
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, headers=headers)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def export(self, snapshot: Snapshot) -> ExportResult:
        httpx = _require_httpx()
        if snapshot.is_empty:
            return ExportResult.SUCCESS
        try:
            response = self._client.post(self._endpoint, json=encode_snapshot(snapshot))
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            retryable = status == 429 or status >= 500
            return self._failed(
                ExportError(
                    _EXPORTER_NAME,
                    f"HTTP {status} from POST {self._endpoint}",
                    retryable=retryable,
                    status_code=status,
                    cause=exc,
                )
            )
        except httpx.HTTPError as exc:
            return self._failed(ExportError(_EXPORTER_NAME, str(exc) or repr(exc), retryable=True, cause=exc))
        except Exception as exc:  # noqa: BLE001 – export reports failure as a value
            return self._failed(ExportError(_EXPORTER_NAME, repr(exc), cause=exc))
        _log.debug("metrics.http_export_sent", endpoint=self._endpoint, records=len(snapshot))
        return ExportResult.SUCCESS

    def _failed(self, error: ExportError) -> ExportResult:
        _log.warning("metrics.http_export_failed", endpoint=self._endpoint, error=error.to_dict())
        return ExportResult.FAILURE_RETRYABLE if error.retryable else ExportResult.FAILURE_NOT_RETRYABLE

    def shutdown(self) -> None:
        if self._owns_client:
            self._client.close()


__all__ = ["HttpJsonExporter", "encode_snapshot"]
