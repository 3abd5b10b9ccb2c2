"""OpenTelemetry tracing for registry operations.

Tracing is off unless ``setup_tracing`` installs a provider; until then
``trace_span`` runs against OpenTelemetry's no-op tracer.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import PurePath
from typing import Any, Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

_tracer: trace.Tracer | None = None
_provider: TracerProvider | None = None


def setup_tracing(
    service_name: str = "tabstore",
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider exporting registry spans.

    Args:
        service_name: Service name reported with every span
        otlp_endpoint: OTLP collector endpoint (e.g., "http://localhost:4317")
        console_export: Also print finished spans (for debugging)

    Returns:
        The tracer used by ``trace_span``
    """
    global _tracer, _provider

    from tabstore import __version__

    resource = Resource.create(
        {
            "service.name": service_name,
            "service.version": __version__,
        }
    )
    _provider = TracerProvider(resource=resource)

    if otlp_endpoint:
        _provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        _provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(_provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def shutdown_tracing() -> None:
    """Flush pending spans; the command loop is short-lived."""
    global _tracer, _provider
    if _provider is not None:
        _provider.shutdown()
    _provider = None
    _tracer = None


def get_tracer() -> trace.Tracer:
    """Get the global tracer instance."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("tabstore")
    return _tracer


@contextmanager
def trace_span(
    name: str,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """
    Run a block inside a span.

    Path attributes are recorded as strings.

    Args:
        name: Span name, e.g. ``registry.open``
        attributes: Optional span attributes

    Yields:
        The active span
    """
    with get_tracer().start_as_current_span(name) as span:
        for key, value in (attributes or {}).items():
            if isinstance(value, PurePath):
                value = str(value)
            span.set_attribute(key, value)
        yield span
