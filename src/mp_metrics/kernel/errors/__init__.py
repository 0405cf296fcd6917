"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── ConfigError      (mp_metrics.config.errors)
    └── InfrastructureError  (infrastructure.py)
        └── ExportError
"""

from mp_metrics.kernel.errors.application import ApplicationError
from mp_metrics.kernel.errors.base import BaseError
from mp_metrics.kernel.errors.infrastructure import ExportError, InfrastructureError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ExportError",
    "InfrastructureError",
]
