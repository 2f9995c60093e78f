"""
Prometheus metrics for the subscription and translation pipelines.

Defines and exposes metrics for:
- Synchronization outcomes per pass
- Document fetch counts and latency
- Translation requests per mode

Collectors live in the default prometheus_client registry.
"""

from prometheus_client import REGISTRY, Counter, Histogram, write_to_textfile

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the subscriber application.

    Usage:
        metrics = get_metrics()
        metrics.record_sync_result("updated")
        metrics.record_fetch("ok", latency=0.42)
    """

    def __init__(self):
        """Initialize Prometheus metrics."""

        self.sync_results = Counter(
            "subscriber_sync_results_total",
            "Synchronization passes by outcome",
            ["outcome"],  # updated, checked_only, fetch_failure, unexpected_error
        )

        self.document_fetches = Counter(
            "subscriber_document_fetches_total",
            "Document fetches by status",
            ["status"],  # ok, error
        )

        self.fetch_latency = Histogram(
            "subscriber_fetch_latency_seconds",
            "Time to fetch and parse one document",
            buckets=LATENCY_BUCKETS,
        )

        self.translations = Counter(
            "subscriber_translations_total",
            "Translation requests by mode and status",
            ["mode", "status"],  # status: success, error
        )

    def record_sync_result(self, outcome: str) -> None:
        """Record the outcome of one synchronization pass."""
        self.sync_results.labels(outcome=outcome).inc()

    def record_fetch(self, status: str, latency: float | None = None) -> None:
        """
        Record a document fetch.

        Args:
            status: "ok" or "error"
            latency: Fetch duration in seconds, if measured
        """
        self.document_fetches.labels(status=status).inc()
        if latency is not None:
            self.fetch_latency.observe(latency)

    def record_translation(self, mode: str, success: bool) -> None:
        """Record a translation request."""
        status = "success" if success else "error"
        self.translations.labels(mode=mode, status=status).inc()

    def write_textfile(self, path: str) -> None:
        """Write every registered metric to a Prometheus text file."""
        write_to_textfile(path, REGISTRY)


# Global metrics instance
_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics
