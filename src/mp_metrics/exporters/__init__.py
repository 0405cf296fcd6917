"""Exporters – Prometheus pull endpoint and HTTP JSON push."""
from mp_metrics.exporters.prometheus import PrometheusExporter, PrometheusExporterOptions

__all__ = ["PrometheusExporter", "PrometheusExporterOptions"]
