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

from unique_jobs.constants import (
    METRIC_JOBS_REMOVED,
    METRIC_JOBS_SUBMITTED,
    METRIC_REGISTRY_LATENCY,
    METRIC_REGISTRY_OPERATIONS,
    METRIC_REGISTRY_PARSE_FAILURES,
)

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for unique job handling.

    Collects metrics for:
    - Submissions by outcome (created, existing, passthrough)
    - Removals by status
    - Registry reads/writes and their latency
    - Registry documents that failed to parse
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.jobs_submitted = Counter(
            METRIC_JOBS_SUBMITTED,
            "Total number of job submissions",
            ["outcome"],
            registry=self._registry,
        )

        self.jobs_removed = Counter(
            METRIC_JOBS_REMOVED,
            "Total number of job removals",
            ["status"],
            registry=self._registry,
        )

        self.registry_operations = Counter(
            METRIC_REGISTRY_OPERATIONS,
            "Total number of registry store operations",
            ["operation", "status"],
            registry=self._registry,
        )

        self.registry_latency = Histogram(
            METRIC_REGISTRY_LATENCY,
            "Registry store operation latency in seconds",
            ["operation"],
            buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

        self.registry_parse_failures = Counter(
            METRIC_REGISTRY_PARSE_FAILURES,
            "Registry documents that could not be parsed and were reset",
            registry=self._registry,
        )

    def record_submission(self, outcome: str) -> None:
        """Record a job submission."""
        self.jobs_submitted.labels(outcome=outcome).inc()

    def record_removal(self, status: str) -> None:
        """Record a job removal."""
        self.jobs_removed.labels(status=status).inc()

    def record_registry_operation(
        self,
        operation: str,
        status: str,
        duration_seconds: float,
    ) -> None:
        """Record a registry store operation."""
        self.registry_operations.labels(operation=operation, status=status).inc()
        self.registry_latency.labels(operation=operation).observe(duration_seconds)

    def record_parse_failure(self) -> None:
        """Record a registry document that had to be reset."""
        self.registry_parse_failures.inc()

    @property
    def registry(self) -> CollectorRegistry:
        """The Prometheus registry metrics are recorded in."""
        return self._registry

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
    """Get the process-wide metrics collector, creating it on first use."""
    if _metrics is None:
        return setup_metrics()
    return _metrics
