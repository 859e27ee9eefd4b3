"""
SCRIPTOR - Tracing with OpenTelemetry

Spans wrap keyword search and cross-reference ranking. Until
``setup_tracing`` installs an SDK provider the OpenTelemetry API hands out
no-op tracers.

Usage:
    from observability.tracing import setup_tracing, get_tracer, create_span

    setup_tracing(TracingConfig(enabled=True, console_export=True))

    with create_span("scriptor.search", attributes={"query": "love"}) as span:
        ...
"""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource, SERVICE_NAME, SERVICE_VERSION
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import ConsoleSpanExporter, SimpleSpanProcessor
from opentelemetry.trace import Status, StatusCode, SpanKind

# Global state
_tracer_provider: Optional[TracerProvider] = None


@dataclass
class TracingConfig:
    """Configuration for OpenTelemetry tracing."""

    service_name: str = "scriptor"
    service_version: str = "1.0.0"
    enabled: bool = field(
        default_factory=lambda: os.getenv("OTEL_TRACING_ENABLED", "false").lower() == "true"
    )
    console_export: bool = field(
        default_factory=lambda: os.getenv("OTEL_TRACE_CONSOLE", "false").lower() == "true"
    )


def setup_tracing(config: Optional[TracingConfig] = None) -> Optional[TracerProvider]:
    """
    Install an SDK tracer provider when tracing is enabled.

    Returns:
        The installed provider, or None when tracing stays disabled
    """
    global _tracer_provider

    if _tracer_provider is not None:
        return _tracer_provider

    config = config or TracingConfig()
    if not config.enabled:
        return None

    resource = Resource.create({
        SERVICE_NAME: config.service_name,
        SERVICE_VERSION: config.service_version,
    })
    _tracer_provider = TracerProvider(resource=resource)

    if config.console_export:
        _tracer_provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(_tracer_provider)
    return _tracer_provider


def get_tracer(name: str, version: str = "1.0.0") -> trace.Tracer:
    """
    Get a tracer instance for manual instrumentation.

    Example:
        >>> tracer = get_tracer(__name__)
        >>> with tracer.start_as_current_span("rank") as span:
        ...     span.set_attribute("candidates", 31102)
    """
    return trace.get_tracer(name, version)


def shutdown_tracing() -> None:
    """Flush pending spans and drop the provider."""
    global _tracer_provider
    if _tracer_provider is not None:
        _tracer_provider.shutdown()
    _tracer_provider = None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: Optional[Dict[str, Any]] = None,
    tracer_name: str = "scriptor",
):
    """
    Context manager for creating spans with automatic error recording.

    Example:
        >>> with create_span("scriptor.cross_references", attributes={"source": "John 3:16"}) as span:
        ...     result = rank(...)
        ...     span.set_attribute("returned", len(result.candidates))
    """
    tracer = get_tracer(tracer_name)
    with tracer.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                if value is not None:
                    span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            raise
