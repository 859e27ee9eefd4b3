"""
SCRIPTOR - Observability Package

Structured logging and OpenTelemetry tracing.

Components:
- logging: structlog integration with trace context propagation
- tracing: tracer access and span helpers

Usage:
    from observability import setup_logging, get_logger, get_tracer

    setup_logging()
    logger = get_logger(__name__)
    tracer = get_tracer(__name__)
"""
from observability.logging import (
    LoggingConfig,
    LogContext,
    setup_logging,
    get_logger,
    set_level,
    shutdown_logging,
)
from observability.tracing import (
    TracingConfig,
    setup_tracing,
    get_tracer,
    create_span,
    shutdown_tracing,
)

__all__ = [
    # Logging
    "LoggingConfig",
    "LogContext",
    "setup_logging",
    "get_logger",
    "set_level",
    "shutdown_logging",
    # Tracing
    "TracingConfig",
    "setup_tracing",
    "get_tracer",
    "create_span",
    "shutdown_tracing",
]
