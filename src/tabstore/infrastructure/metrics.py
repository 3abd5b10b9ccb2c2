"""Prometheus metrics for the table store."""

from __future__ import annotations

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
    REGISTRY,
    CollectorRegistry,
)


class MetricsRegistry:
    """Registry of all table store metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Catalog operation metrics
        self.operations_total = Counter(
            "tabstore_operations_total",
            "Total number of registry operations",
            ["operation", "status"],  # status: success, error
            registry=self._registry,
        )

        self.operation_latency_seconds = Histogram(
            "tabstore_operation_latency_seconds",
            "Registry operation latency in seconds",
            ["operation"],  # open, save, import, export, join
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 5.0),
            registry=self._registry,
        )

        self.tables_loaded = Gauge(
            "tabstore_tables_loaded",
            "Number of tables held by the registry",
            registry=self._registry,
        )

        # Storage metrics
        self.rows_skipped_total = Counter(
            "tabstore_rows_skipped_total",
            "Data lines skipped on load because their field count did not match the columns",
            registry=self._registry,
        )

        self.rows_written_total = Counter(
            "tabstore_rows_written_total",
            "Total rows written to table files",
            registry=self._registry,
        )

        self.info = Info(
            "tabstore",
            "Table store information",
            registry=self._registry,
        )


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from tabstore import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
