"""API – process-wide meter provider.

Libraries call :func:`get_meter` at import time and start recording
immediately; the application calls :func:`set_meter_provider` once it has
built a real provider.  Instruments created before that call stay no-op.
"""
from __future__ import annotations

from mp_metrics.api.ports import Meter, MeterProvider
from mp_metrics.api.proxy import ProxyMeterProvider

_PROXY_PROVIDER = ProxyMeterProvider()


def get_meter_provider() -> ProxyMeterProvider:
    return _PROXY_PROVIDER


def set_meter_provider(provider: MeterProvider) -> bool:
    """Bind the global proxy; returns ``False`` if one was already set."""
    return _PROXY_PROVIDER.attach_real_provider(provider)


def get_meter(instrumentation_name: str, instrumentation_version: str | None = None) -> Meter:
    return _PROXY_PROVIDER.get(instrumentation_name, instrumentation_version)


__all__ = ["get_meter", "get_meter_provider", "set_meter_provider"]
