"""FastAPI adapter – metrics scrape router."""
from mp_metrics.adapters.fastapi.routers import FastAPIMetricsRouter, FastAPIPrometheusRouter

__all__ = ["FastAPIMetricsRouter", "FastAPIPrometheusRouter"]
