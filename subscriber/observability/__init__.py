"""Observability layer - logging and metrics."""

from subscriber.observability.logging import setup_logging
from subscriber.observability.metrics import MetricsCollector, get_metrics

__all__ = ["setup_logging", "MetricsCollector", "get_metrics"]
