"""
IoC Facades - Tracing with OpenTelemetry

Thin helpers over the OpenTelemetry API. The library never installs a
tracer provider itself; the host application configures one (or not, in
which case spans are no-ops).

Usage:
    from observability.tracing import get_tracer, create_span

    tracer = get_tracer(__name__)

    with create_span("facade.resolve", {"facade.accessor": "mailer"}):
        ...
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind

TRACER_NAME = "ioc-facades"


def get_tracer(name: str = TRACER_NAME, version: str = "1.0.0") -> trace.Tracer:
    """
    Get a tracer from the globally configured provider.

    Args:
        name: Tracer name, typically __name__ of the module
        version: Tracer version string
    """
    return trace.get_tracer(name, version)


@contextmanager
def create_span(
    name: str,
    attributes: Optional[Dict[str, Any]] = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Iterator[Span]:
    """
    Start a span as the current span.

    Exceptions raised inside the block are recorded on the span and
    re-raised unchanged.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=kind) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)
        yield span
