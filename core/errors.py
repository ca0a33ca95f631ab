"""
IoC Facades - Unified Error Handling

Error hierarchy shared by the facade layer and the reference container.
Container errors (binding, build) are raised by containers and reach
facade callers untouched; the facade layer adds only its own two kinds.

Every error carries a severity, an optional structured context and is
recorded on the active OpenTelemetry span when one is recording.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class ErrorSeverity(Enum):
    """Error severity levels."""

    ERROR = "error"
    CRITICAL = "critical"  # Nothing can resolve until configuration changes


@dataclass
class ErrorContext:
    """Where a resolution failed, for debugging and trace correlation."""

    operation: str
    component: str
    accessor: Optional[str] = None
    trace_id: Optional[str] = None
    span_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_current_span(
        cls,
        operation: str,
        component: str,
        **kwargs: Any
    ) -> "ErrorContext":
        """Build a context carrying the ids of the current span, if any."""
        span_context = trace.get_current_span().get_span_context()
        if span_context.is_valid:
            kwargs.setdefault("trace_id", format(span_context.trace_id, "032x"))
            kwargs.setdefault("span_id", format(span_context.span_id, "016x"))

        return cls(
            operation=operation,
            component=component,
            **kwargs
        )


class FacadeKitError(Exception):
    """Base exception for facade and container errors."""

    default_severity: ErrorSeverity = ErrorSeverity.ERROR
    error_code: str = "FACADE_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[BaseException] = None,
        suggestions: Optional[List[str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.severity = severity or self.default_severity
        self.cause = cause
        self.suggestions = suggestions or []
        self.raised_at = datetime.now(timezone.utc)

        self._record_to_span()

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if not span.is_recording():
            return

        span.set_status(Status(StatusCode.ERROR, self.message))
        span.record_exception(self)
        span.set_attribute("facade.error.code", self.error_code)
        span.set_attribute("facade.error.severity", self.severity.value)
        if self.context and self.context.accessor:
            span.set_attribute("facade.accessor", self.context.accessor)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view of the error."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "severity": self.severity.value,
            "suggestions": list(self.suggestions),
            "raised_at": self.raised_at.isoformat(),
            "context": self.context.to_dict() if self.context else None,
            "cause": str(self.cause) if self.cause else None,
        }

    def __str__(self) -> str:
        text = f"[{self.error_code}] {self.message}"
        if self.cause:
            text += f" [caused by: {self.cause}]"
        return text


class ContainerError(FacadeKitError):
    """Raised by an IoC container while resolving an abstract."""

    error_code = "CONTAINER_ERROR"

    def __init__(
        self,
        message: str,
        abstract: Optional[Hashable] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.abstract = abstract


class BindingError(ContainerError):
    """No binding is registered for the requested abstract."""

    error_code = "BINDING_ERROR"


class BuildError(ContainerError):
    """A binding exists but its instance could not be built."""

    error_code = "BUILD_ERROR"


class ContainerUnavailableError(FacadeKitError):
    """Resolution attempted while no usable container is configured."""

    error_code = "CONTAINER_UNAVAILABLE"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        accessor: Optional[str] = None,
        **kwargs: Any,
    ):
        kwargs.setdefault("suggestions", ["Set Facade.ioc before using a facade"])
        super().__init__(message, **kwargs)
        self.accessor = accessor


class AbstractInstantiationError(FacadeKitError, TypeError):
    """An abstract facade type was instantiated directly."""

    error_code = "ABSTRACT_INSTANTIATION"
