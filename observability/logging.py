"""
SCRIPTOR - Structured Logging with Trace Context

Integrates structlog with OpenTelemetry trace context so that log events
emitted while a cross-reference query is traced carry its trace_id and
span_id.

Log output goes to stderr, keeping stdout free for command results.

Usage:
    from observability.logging import setup_logging, get_logger

    setup_logging(LoggingConfig(level="DEBUG"))

    logger = get_logger(__name__)
    logger.info("Cross references ranked", source="John 3:16", returned=5)
"""
from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog
from opentelemetry import trace
from structlog.types import EventDict, WrappedLogger

_configured: bool = False

CONSOLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class LoggingConfig:
    """Logging settings read from ``LOG_*`` environment variables."""

    service_name: str = "scriptor"
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING").upper())
    json_format: bool = field(default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json")
    enable_trace_context: bool = True
    log_to_file: bool = field(default_factory=lambda: os.getenv("LOG_TO_FILE", "false").lower() == "true")
    log_file_path: Path = field(default_factory=lambda: Path(os.getenv("LOG_FILE", "./logs/scriptor.log")))
    max_file_size: int = 5 * 1024 * 1024
    backup_count: int = 3

    @property
    def numeric_level(self) -> int:
        return getattr(logging, self.level, logging.WARNING)


# =============================================================================
# PROCESSORS
# =============================================================================

def add_trace_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Attach trace_id and span_id while a search or ranking span is active."""
    ctx = trace.get_current_span().get_span_context()
    if ctx.is_valid:
        event_dict["trace_id"] = format(ctx.trace_id, "032x")
        event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def add_service_context(service_name: str) -> structlog.types.Processor:
    def processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


# =============================================================================
# SETUP
# =============================================================================

def setup_logging(config: Optional[LoggingConfig] = None, force: bool = False) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        config: Logging configuration. Uses defaults if not provided.
        force: Reconfigure even if logging was already set up.
    """
    global _configured

    if _configured and not force:
        return

    config = config or LoggingConfig()

    processors: List[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context(config.service_name),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if config.enable_trace_context:
        processors.append(add_trace_context)
    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if config.json_format else structlog.dev.ConsoleRenderer(colors=False),
    ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _install_handlers(config)
    _configured = True


def _install_handlers(config: LoggingConfig) -> None:
    """Replace the root logger's handlers with stderr and optional file output."""
    level = config.numeric_level

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(
        _JsonFormatter() if config.json_format else logging.Formatter(CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    handlers: List[logging.Handler] = [stderr_handler]

    if config.log_to_file:
        config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.log_file_path,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(_JsonFormatter())
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(level)
        root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger("opentelemetry").setLevel(logging.WARNING)


class _JsonFormatter(logging.Formatter):
    """One JSON object per stdlib log record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


# =============================================================================
# ACCESS
# =============================================================================

def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger instance, configuring defaults on first use.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Search finished", query="love", matches=12)
    """
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)


def set_level(level: str) -> None:
    """Change the root log level after setup, e.g. for ``--verbose``."""
    numeric = getattr(logging, level.upper(), logging.WARNING)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric)
    for handler in root_logger.handlers:
        handler.setLevel(numeric)


def shutdown_logging() -> None:
    """Flush and close handlers."""
    global _configured

    for handler in logging.getLogger().handlers:
        handler.flush()
        handler.close()
    _configured = False


class LogContext:
    """
    Bind fields to every log event emitted inside the block.

    Example:
        >>> with LogContext(command="xref"):
        ...     logger.info("Cross references ranked")
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.context)
