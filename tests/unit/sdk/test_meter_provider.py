"""Unit tests for MeterProviderSdk."""

from __future__ import annotations

import httpx

from mp_metrics.config import MetricsSettings
from mp_metrics.exporters.http import HttpJsonExporter
from mp_metrics.sdk import MeterProviderSdk, MeterSdk, UngroupedBatcher
from mp_metrics.testing import InMemoryMetricExporter


class TestMeterProviderSdk:
    def test_meters_cached_per_name_and_version(self) -> None:
        provider = MeterProviderSdk()
        assert provider.get("lib") is provider.get("lib")
        assert provider.get("lib", "2.0") is not provider.get("lib")
        assert isinstance(provider.get("lib"), MeterSdk)

    def test_meters_share_processor(self) -> None:
        batcher = UngroupedBatcher()
        provider = MeterProviderSdk(processor=batcher)
        provider.get("a").create_int_counter("a_total").add(1)
        provider.get("b").create_int_counter("b_total").add(1)
        assert len(batcher.checkpoint()) == 2

    def test_no_exporter_means_no_controller(self) -> None:
        provider = MeterProviderSdk()
        assert provider.controller is None
        assert provider.force_flush() is None
        provider.shutdown()

    def test_collect_polls_all_meters(self) -> None:
        provider = MeterProviderSdk()
        provider.get("a").create_int_observer("a_obs", lambda obs: obs.observe(1))
        provider.get("b").create_int_observer("b_obs", lambda obs: obs.observe(2))
        provider.collect()
        names = sorted(r.name for r in provider.processor.checkpoint())
        assert names == ["a_obs", "b_obs"]

    def test_force_flush_exports_observers(self) -> None:
        exporter = InMemoryMetricExporter()
        provider = MeterProviderSdk(exporter=exporter, push_interval=60)
        try:
            provider.get("lib").create_int_observer("depth", lambda obs: obs.observe(4))
            event = provider.force_flush()
            assert event is not None and event.success
            assert exporter.snapshots[-1].find("depth").data.value == 4  # type: ignore[union-attr]
        finally:
            provider.shutdown()

    def test_shutdown_flushes_and_shuts_exporter_once(self) -> None:
        exporter = InMemoryMetricExporter()
        provider = MeterProviderSdk(exporter=exporter, push_interval=60, flush_on_shutdown=True)
        provider.get("lib").create_int_counter("c").add(2)
        provider.shutdown()
        provider.shutdown()
        assert exporter.is_shutdown
        assert exporter.export_count == 1
        assert exporter.snapshots[0].find("c").data.sum == 2  # type: ignore[union-attr]

    def test_from_settings(self) -> None:
        exporter = InMemoryMetricExporter()
        settings = MetricsSettings(push_interval=30.0, flush_on_shutdown=False)
        provider = MeterProviderSdk.from_settings(settings, exporter=exporter)
        try:
            assert provider.controller is not None
            assert provider.controller.interval == 30.0
        finally:
            provider.shutdown()
        assert exporter.export_count == 0

    def test_from_settings_builds_http_exporter_for_endpoint(self) -> None:
        settings = MetricsSettings(
            export_endpoint="https://collector.test/v1/metrics",
            export_timeout=2.5,
            flush_on_shutdown=False,
        )
        provider = MeterProviderSdk.from_settings(settings)
        try:
            assert isinstance(provider.exporter, HttpJsonExporter)
            assert provider.exporter.endpoint == "https://collector.test/v1/metrics"
            assert provider.exporter._client.timeout == httpx.Timeout(2.5)
            assert provider.controller is not None
        finally:
            provider.shutdown()

    def test_from_settings_explicit_exporter_wins_over_endpoint(self) -> None:
        exporter = InMemoryMetricExporter()
        settings = MetricsSettings(export_endpoint="https://collector.test/v1/metrics", flush_on_shutdown=False)
        provider = MeterProviderSdk.from_settings(settings, exporter=exporter)
        try:
            assert provider.exporter is exporter
        finally:
            provider.shutdown()

    def test_from_settings_without_endpoint_or_exporter_does_not_push(self) -> None:
        provider = MeterProviderSdk.from_settings(MetricsSettings())
        assert provider.exporter is None
        assert provider.controller is None
