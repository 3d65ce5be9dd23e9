"""
Prometheus metrics collection.
"""

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from workqueue.constants import (
    METRIC_API_LATENCY,
    METRIC_API_REQUESTS,
    METRIC_RECORDS_CREATED,
    METRIC_RECORDS_DELETED,
    METRIC_STATUS_UPDATES,
    METRIC_SUBMISSIONS_REJECTED,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for the work queue.

    Collects metrics for:
    - Record creation, status updates and deletes
    - Rejected submissions
    - API requests

    Queue totals and revenue are not exported; they are derived from
    the table on every request.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.records_created = Counter(
            METRIC_RECORDS_CREATED,
            "Total number of queue records created",
            ["source"],
            registry=self._registry,
        )

        self.status_updates = Counter(
            METRIC_STATUS_UPDATES,
            "Total number of status updates applied",
            ["status"],
            registry=self._registry,
        )

        self.records_deleted = Counter(
            METRIC_RECORDS_DELETED,
            "Total number of queue records deleted",
            registry=self._registry,
        )

        self.submissions_rejected = Counter(
            METRIC_SUBMISSIONS_REJECTED,
            "Total number of submissions rejected by validation",
            ["field", "reason"],
            registry=self._registry,
        )

        self.api_requests = Counter(
            METRIC_API_REQUESTS,
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self._registry,
        )

        self.api_latency = Histogram(
            METRIC_API_LATENCY,
            "API request latency in seconds",
            ["method", "endpoint"],
            buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
            registry=self._registry,
        )

    def record_created(self, source: str) -> None:
        """Record a queue record creation from the board or the API."""
        self.records_created.labels(source=source).inc()

    def record_status_update(self, status: str) -> None:
        """Record an applied status update."""
        self.status_updates.labels(status=status).inc()

    def record_deleted(self) -> None:
        """Record a delete."""
        self.records_deleted.inc()

    def record_rejection(self, field: str, reason: str) -> None:
        """Record a rejected submission field."""
        self.submissions_rejected.labels(field=field, reason=reason).inc()

    def record_api_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration_seconds: float,
    ) -> None:
        """Record an API request."""
        self.api_requests.labels(
            method=method,
            endpoint=endpoint,
            status=str(status),
        ).inc()
        self.api_latency.labels(method=method, endpoint=endpoint).observe(
            duration_seconds
        )

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """
    Get the metrics collector instance, creating it on first use.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    if _metrics is None:
        return setup_metrics()
    return _metrics
