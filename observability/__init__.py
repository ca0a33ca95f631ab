"""
IoC Facades - Observability Package

Structured logging and tracing helpers used by the facade registry.

Components:
- logging: structlog integration with trace context propagation
- tracing: OpenTelemetry span helpers

Usage:
    from observability import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
"""
from .logging import (
    LogContext,
    LoggingConfig,
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
    shutdown_logging,
    unbind_context,
)
from .tracing import create_span, get_tracer

__all__ = [
    # Logging
    "LoggingConfig",
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    "LogContext",
    "bind_context",
    "unbind_context",
    "clear_context",
    # Tracing
    "get_tracer",
    "create_span",
]
