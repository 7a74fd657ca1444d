"""Prometheus metrics collection for observability."""

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    REGISTRY,
)

# HTTP Request Metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

# Monte Carlo GraphQL Metrics
graphql_operations_total = Counter(
    "graphql_operations_total",
    "Total number of Monte Carlo GraphQL operations",
    ["operation", "status"],
)

graphql_operation_duration_seconds = Histogram(
    "graphql_operation_duration_seconds",
    "Monte Carlo GraphQL operation duration in seconds",
    ["operation"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)

# Resource Lifecycle Metrics
resource_operations_total = Counter(
    "resource_operations_total",
    "Total number of resource lifecycle operations",
    ["resource", "operation", "outcome"],
)

diagnostics_total = Counter(
    "diagnostics_total",
    "Total number of diagnostics emitted",
    ["severity"],
)

# Error Metrics
errors_total = Counter(
    "errors_total",
    "Total number of errors",
    ["error_code", "error_category"],
)


class MetricsCollector:
    """Helper class for collecting metrics."""

    @staticmethod
    def record_http_request(method: str, endpoint: str, status_code: int, duration: float):
        """Record HTTP request metrics."""
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    @staticmethod
    def record_graphql_operation(operation: str, status: str, duration: float):
        """Record a GraphQL call against the Monte Carlo API."""
        graphql_operations_total.labels(operation=operation, status=status).inc()
        graphql_operation_duration_seconds.labels(operation=operation).observe(duration)

    @staticmethod
    def record_resource_operation(resource: str, operation: str, outcome: str):
        """Record the outcome of a lifecycle operation (ok, error, removed)."""
        resource_operations_total.labels(
            resource=resource, operation=operation, outcome=outcome
        ).inc()

    @staticmethod
    def record_diagnostic(severity: str):
        """Record diagnostic emission."""
        diagnostics_total.labels(severity=severity).inc()

    @staticmethod
    def record_error(error_code: str, error_category: str):
        """Record error occurrence."""
        errors_total.labels(error_code=error_code, error_category=error_category).inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Get Prometheus metrics in text format."""
        return generate_latest(REGISTRY)


# Global instance
metrics = MetricsCollector()
