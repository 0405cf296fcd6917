"""Unit tests for HttpJsonExporter (httpx.MockTransport, no network)."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from mp_metrics.api import InstrumentDescriptor, InstrumentKind, LabelSet, NumberKind
from mp_metrics.export import ExportResult, MetricRecord, Snapshot, SumData, SummaryData
from mp_metrics.exporters.http import HttpJsonExporter, encode_snapshot

ENDPOINT = "https://collector.test/v1/metrics"

COUNTER = InstrumentDescriptor(
    "requests", InstrumentKind.COUNTER, NumberKind.INT, monotonic=True, meter_name="web"
)
MEASURE = InstrumentDescriptor(
    "latency", InstrumentKind.MEASURE, NumberKind.DOUBLE, absolute=True, meter_name="web"
)


def _snapshot() -> Snapshot:
    return Snapshot(
        records=(
            MetricRecord(COUNTER, LabelSet({"route": "/"}), SumData(3)),
            MetricRecord(MEASURE, LabelSet(), SummaryData(sum=1.5, count=3, min=0.25, max=1.0)),
        )
    )


def _exporter(handler: Any) -> HttpJsonExporter:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpJsonExporter(ENDPOINT, client=client)


# ---------------------------------------------------------------------------
# encode_snapshot
# ---------------------------------------------------------------------------


class TestEncodeSnapshot:
    def test_document_shape(self) -> None:
        doc = encode_snapshot(_snapshot())
        assert set(doc) == {"start_time", "end_time", "metrics"}
        counter, measure = doc["metrics"]
        assert counter == {
            "name": "requests",
            "kind": "counter",
            "number_kind": "int",
            "meter": "web",
            "labels": {"route": "/"},
            "aggregation": "SumData",
            "sum": 3,
        }
        assert measure["aggregation"] == "SummaryData"
        assert (measure["sum"], measure["count"], measure["min"], measure["max"]) == (1.5, 3, 0.25, 1.0)

    def test_is_json_serialisable(self) -> None:
        json.dumps(encode_snapshot(_snapshot()))


# ---------------------------------------------------------------------------
# HttpJsonExporter
# ---------------------------------------------------------------------------


class TestHttpJsonExporter:
    def test_success_posts_json(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(202)

        assert _exporter(handler).export(_snapshot()) is ExportResult.SUCCESS
        assert len(seen) == 1
        assert seen[0].method == "POST"
        assert str(seen[0].url) == ENDPOINT
        assert json.loads(seen[0].content)["metrics"][0]["name"] == "requests"

    def test_empty_snapshot_sends_nothing(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200)

        assert _exporter(handler).export(Snapshot()) is ExportResult.SUCCESS
        assert seen == []

    @pytest.mark.parametrize(
        "status,expected",
        [
            (500, ExportResult.FAILURE_RETRYABLE),
            (503, ExportResult.FAILURE_RETRYABLE),
            (429, ExportResult.FAILURE_RETRYABLE),
            (400, ExportResult.FAILURE_NOT_RETRYABLE),
            (404, ExportResult.FAILURE_NOT_RETRYABLE),
        ],
    )
    def test_status_mapping(self, status: int, expected: ExportResult) -> None:
        exporter = _exporter(lambda request: httpx.Response(status))
        assert exporter.export(_snapshot()) is expected

    def test_transport_error_is_retryable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        assert _exporter(handler).export(_snapshot()) is ExportResult.FAILURE_RETRYABLE

    def test_unexpected_error_is_not_retryable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("boom")

        assert _exporter(handler).export(_snapshot()) is ExportResult.FAILURE_NOT_RETRYABLE

    def test_shutdown_leaves_injected_client_open(self) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        HttpJsonExporter(ENDPOINT, client=client).shutdown()
        assert not client.is_closed

    def test_shutdown_closes_owned_client(self) -> None:
        exporter = HttpJsonExporter(ENDPOINT, timeout=1.0)
        exporter.shutdown()
        assert exporter._client.is_closed

    def test_endpoint_property(self) -> None:
        assert HttpJsonExporter(ENDPOINT, timeout=1.0).endpoint == ENDPOINT
