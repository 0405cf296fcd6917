"""FastAPI adapter – metrics scrape router."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mp_metrics.export.ports import Servable
from mp_metrics.exporters.prometheus import PrometheusExporter

if TYPE_CHECKING:
    from mp_metrics.config import MetricsSettings


def _require_fastapi() -> None:
    try:
        import fastapi  # noqa: F401
    except ImportError as exc:
        raise ImportError(
            "Install 'mp-metrics[fastapi]' to use the FastAPI adapter"
        ) from exc


def FastAPIMetricsRouter(
    servable: Servable,
    path: str = "/metrics",
    tags: list[str] | None = None,
) -> Any:
    """Return a router serving *servable*'s current state on ``GET path``.

    Parameters
    ----------
    servable:
        Pull target, typically a
        :class:`~mp_metrics.exporters.prometheus.PrometheusExporter`.
    path:
        Route of the scrape endpoint.
    tags:
        OpenAPI tags for the generated route.
    """
    _require_fastapi()
    from fastapi import APIRouter  # type: ignore[import-untyped]
    from fastapi.responses import PlainTextResponse, Response  # type: ignore[import-untyped]

    router = APIRouter(tags=tags or ["ops"])

    @router.get(path, response_class=PlainTextResponse)
    async def metrics() -> Any:
        """Scrape endpoint – renders the most recently published snapshot."""
        body, content_type = servable.render_current_state()
        return Response(content=body, media_type=content_type)

    return router


def FastAPIPrometheusRouter(
    settings: MetricsSettings,
    tags: list[str] | None = None,
) -> tuple[PrometheusExporter, Any]:
    """Build a :class:`PrometheusExporter` and the router that serves it.

    The exporter prefixes metric names with ``settings.namespace``; the route
    is mounted on ``settings.scrape_path``.  Pass the exporter to
    :meth:`MeterProviderSdk.from_settings` and include the router in the app::

        exporter, router = FastAPIPrometheusRouter(settings)
        provider = MeterProviderSdk.from_settings(settings, exporter=exporter)
        app.include_router(router)
    """
    exporter = PrometheusExporter.from_settings(settings)
    return exporter, FastAPIMetricsRouter(exporter, path=settings.scrape_path, tags=tags)


__all__ = ["FastAPIMetricsRouter", "FastAPIPrometheusRouter"]
