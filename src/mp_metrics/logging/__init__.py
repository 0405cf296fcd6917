"""Logging – structlog configuration and logger helper."""
from mp_metrics.logging.factory import JsonLoggerFactory
from mp_metrics.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
