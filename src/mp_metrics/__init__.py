"""
mp_metrics – Metrics instrumentation and export pipeline.

Import path convention::

    from mp_metrics.api import LabelSet, get_meter_provider
    from mp_metrics.sdk import MeterProviderSdk, UngroupedBatcher
    from mp_metrics.exporters.prometheus import PrometheusExporter
    from mp_metrics.adapters.fastapi import FastAPIMetricsRouter
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
