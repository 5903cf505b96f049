"""
Tracing Helpers

Architectural Intent:
- Thin helpers over the OpenTelemetry API used by adapters
- Works against whatever TracerProvider is installed (no-op when none is)

Design Decisions:
- traced() names spans "<Component>.<operation>"
- trace_flattened_object() turns nested request/response dicts into dotted
  span attributes, since span attributes must be primitives
- set_error() records the exception event and marks the span as failed
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional
import json

from opentelemetry import trace
from opentelemetry.trace import Span, Status, StatusCode, Tracer

_PRIMITIVES = (str, bool, int, float)


def get_tracer(name: str = "incidentrelay") -> Tracer:
    return trace.get_tracer(name)


@contextmanager
def traced(
    tracer: Tracer,
    component: str,
    operation: str,
    attributes: Optional[dict[str, str]] = None,
) -> Iterator[Span]:
    """Run a block inside a span named component.operation."""
    with tracer.start_as_current_span(
        f"{component}.{operation}", attributes=attributes or {}
    ) as span:
        yield span


def flatten_object(obj: Any, prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into {"a.b.c": value} with primitive values."""
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for key, value in obj.items():
            name = f"{prefix}.{key}" if prefix else str(key)
            flat.update(flatten_object(value, name))
    elif obj is None:
        pass
    elif isinstance(obj, _PRIMITIVES):
        flat[prefix or "value"] = obj
    else:
        flat[prefix or "value"] = json.dumps(obj, default=str)
    return flat


def trace_flattened_object(span: Span, obj: Mapping[str, Any]) -> None:
    """Attach a nested object to a span as flattened attributes."""
    for key, value in flatten_object(obj).items():
        span.set_attribute(key, value)


def set_error(span: Span, error: BaseException) -> None:
    """Record an exception on the span and mark it as an error."""
    span.record_exception(error)
    span.set_status(Status(StatusCode.ERROR, str(error)))
