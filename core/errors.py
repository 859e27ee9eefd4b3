"""
SCRIPTOR - Unified Error Handling

Provides the error hierarchy shared by the corpus loaders, the synonym
configuration, the search and cross-reference engines and the CLI.

Every error carries a code, a severity, a recoverable flag and the
suggestions shown under the red message in the terminal. Errors raised
inside a traced search or cross-reference query mark that span as failed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class ErrorSeverity(Enum):
    """Error severity levels for prioritized handling."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ScriptorError(Exception):
    """
    Base exception for all SCRIPTOR-specific errors.

    Args:
        message: Text shown to the user
        severity: Overrides the class default
        cause: Underlying exception, if any
        recoverable: True when the interactive menu can carry on
        suggestions: Hints printed below the message
        reference: Verse reference the failing operation was working on
    """

    default_severity: ErrorSeverity = ErrorSeverity.ERROR
    error_code: str = "SCRIPTOR_ERROR"

    def __init__(
        self,
        message: str,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[Exception] = None,
        recoverable: bool = False,
        suggestions: Optional[List[str]] = None,
        reference: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.severity = severity or self.default_severity
        self.cause = cause
        self.recoverable = recoverable
        self.suggestions = suggestions or []
        self.reference = reference

        self._record_to_span()

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if span and span.is_recording():
            span.set_status(Status(StatusCode.ERROR, self.message))
            span.record_exception(self)
            span.set_attribute("error.code", self.error_code)
            span.set_attribute("error.severity", self.severity.value)
            span.set_attribute("error.recoverable", self.recoverable)
            if self.reference:
                span.set_attribute("scripture.reference", self.reference)

    def to_dict(self) -> Dict[str, Any]:
        """Structured form used when logging a failed command."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "recoverable": self.recoverable,
            "reference": self.reference,
            "suggestions": self.suggestions,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        text = f"[{self.error_code}] {self.message}"
        if self.cause:
            text += f" [caused by: {self.cause}]"
        return text


class InvalidReferenceFormat(ScriptorError):
    """A reference string does not parse as ``Book Chapter:Verse``."""

    error_code = "INVALID_REFERENCE"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, reference: str, **kwargs: Any):
        kwargs.setdefault("suggestions", ["Use the form 'Book Chapter:Verse', e.g. 'John 3:16'"])
        super().__init__(
            "Invalid reference format. Please use 'Book Chapter:Verse'.",
            recoverable=True,
            reference=reference,
            **kwargs,
        )


class VerseNotFound(ScriptorError):
    """No verse in the corpus matches a parsed reference."""

    error_code = "VERSE_NOT_FOUND"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, reference: str, message: Optional[str] = None, **kwargs: Any):
        super().__init__(message or "Verse not found.", recoverable=True, reference=reference, **kwargs)


class InvalidMetricSpec(ScriptorError):
    """A similarity metric string (e.g. ``"2-gram"``) could not be parsed."""

    error_code = "INVALID_METRIC"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, spec: str, **kwargs: Any):
        super().__init__(
            f"Invalid n-gram specification: {spec!r}",
            recoverable=True,
            **kwargs,
        )
        self.spec = spec


class CorpusLoadError(ScriptorError):
    """The verse corpus could not be read or parsed."""

    error_code = "CORPUS_ERROR"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.path = path


class SynonymConfigError(ScriptorError):
    """The synonym configuration file could not be read."""

    error_code = "SYNONYM_CONFIG_ERROR"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, message: str, path: Optional[str] = None, **kwargs: Any):
        kwargs.setdefault("suggestions", ["Run 'scriptor init-synonyms' to create a default synonyms file"])
        super().__init__(message, recoverable=True, **kwargs)
        self.path = path


class EmptyQueryError(ScriptorError):
    """A search was requested with an empty query."""

    error_code = "EMPTY_QUERY"
    default_severity = ErrorSeverity.WARNING

    def __init__(self, message: str = "Search query cannot be empty.", **kwargs: Any):
        super().__init__(message, recoverable=True, **kwargs)
