"""Prometheus exporter – retained state and text exposition renderer."""
from mp_metrics.exporters.prometheus.exporter import PrometheusExporter, PrometheusExporterOptions
from mp_metrics.exporters.prometheus.render import CONTENT_TYPE, render

__all__ = ["CONTENT_TYPE", "PrometheusExporter", "PrometheusExporterOptions", "render"]
