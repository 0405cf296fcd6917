"""Application-layer errors – wiring and configuration mistakes."""

from __future__ import annotations

from mp_metrics.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Raised when the pipeline is wired or configured incorrectly."""

    default_code = "application_error"


__all__ = ["ApplicationError"]
