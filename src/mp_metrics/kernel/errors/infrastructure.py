"""Infrastructure errors – exporter and transport failures."""

from __future__ import annotations

from typing import Any

from mp_metrics.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O failure that is not a usage mistake."""

    default_code = "infrastructure_error"


class ExportError(InfrastructureError):
    """An exporter could not deliver a snapshot to its backend.

    Export errors never cross the exporter boundary as raised exceptions; they
    are built so that the failure can be logged with :meth:`to_dict` and then
    reported as an :class:`~mp_metrics.export.ExportResult` value.
    """

    default_code = "export_failed"

    def __init__(
        self,
        exporter: str,
        message: str | None = None,
        *,
        retryable: bool = False,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Exporter '{exporter}' failed", **kwargs)
        self.exporter = exporter
        self.retryable = retryable
        self.status_code = status_code
        self.detail.setdefault("exporter", exporter)
        self.detail.setdefault("retryable", retryable)
        if status_code is not None:
            self.detail.setdefault("status_code", status_code)


__all__ = ["ExportError", "InfrastructureError"]
