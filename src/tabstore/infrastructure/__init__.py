"""Infrastructure layer - cross-cutting concerns."""

from tabstore.infrastructure.config import Config, get_config
from tabstore.infrastructure.logging import bind_catalog, get_logger, setup_logging
from tabstore.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from tabstore.infrastructure.tracing import (
    get_tracer,
    setup_tracing,
    shutdown_tracing,
    trace_span,
)

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "bind_catalog",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "trace_span",
    "shutdown_tracing",
]
