"""Testing – fakes for pipeline tests."""
from mp_metrics.testing.fakes import InMemoryMetricExporter

__all__ = ["InMemoryMetricExporter"]
