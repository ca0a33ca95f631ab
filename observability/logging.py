"""
IoC Facades - Structured Logging

structlog on top of stdlib logging. Facade resolution events are emitted
at debug level under the ``facades`` logger hierarchy; when a span is
active its ids are added to every event.

Usage:
    from observability.logging import setup_logging, get_logger

    setup_logging(LoggingConfig(level="DEBUG"))

    logger = get_logger(__name__)
    logger.debug("facade.resolved", accessor="mailer")
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from config import get_config

# Global state
_configured: bool = False

PACKAGE_LOGGER = "facades"


def _default_level() -> str:
    config = get_config()
    return "DEBUG" if config.debug else config.logging.level


@dataclass
class LoggingConfig:
    """
    Configuration for structured logging.

    Defaults come from config.get_config(), so reload_config() followed by
    shutdown_logging() and setup_logging() picks up new settings.
    DEBUG=true forces the DEBUG level.
    """

    service_name: str = "ioc-facades"
    level: str = field(default_factory=_default_level)
    json_format: bool = field(
        default_factory=lambda: get_config().logging.json_format
    )
    enable_trace_context: bool = True
    environment: str = field(default_factory=lambda: get_config().env.value)


def add_trace_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add trace_id and span_id of the current OpenTelemetry span."""
    from opentelemetry import trace

    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict["trace_id"] = format(span_context.trace_id, "032x")
        event_dict["span_id"] = format(span_context.span_id, "016x")
    return event_dict


def _service_fields(config: LoggingConfig) -> structlog.types.Processor:
    fields = {"service": config.service_name, "environment": config.environment}

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure structlog and the ``facades`` stdlib logger.

    Repeated calls are ignored until shutdown_logging() runs.
    """
    global _configured

    if _configured:
        return

    config = config or LoggingConfig()

    processors: list[structlog.types.Processor] = [
        # Drop events below the stdlib level before any other work
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _service_fields(config),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if config.enable_trace_context:
        processors.append(add_trace_context)
    processors.append(structlog.processors.format_exc_info)
    processors.append(
        structlog.processors.JSONRenderer()
        if config.json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.level, logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level)
    package_logger.propagate = False

    _configured = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger.

    Logging is configured on first use only when the host application has
    not configured structlog itself; an existing configuration is kept.
    """
    if not _configured and not structlog.is_configured():
        setup_logging()

    return structlog.get_logger(name)


def shutdown_logging() -> None:
    """Flush handlers and allow setup_logging() to run again."""
    global _configured

    for handler in logging.getLogger(PACKAGE_LOGGER).handlers:
        handler.flush()

    structlog.reset_defaults()
    _configured = False


class LogContext:
    """
    Bind fields to every event logged inside the block.

    Example:
        >>> with LogContext(request_id="abc123"):
        ...     Mail().send("hello")
    """

    def __init__(self, **fields: Any):
        self.fields = fields

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.fields)


def bind_context(**fields: Any) -> None:
    structlog.contextvars.bind_contextvars(**fields)


def unbind_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
