"""
incidentrelay Telemetry Infrastructure

Architectural Intent:
- OpenTelemetry integration for tracing notifier calls
- Span helpers used by adapters, exporter setup used by the composition root
"""

from incidentrelay.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    OTELConfig,
    create_exporter,
)
from incidentrelay.infrastructure.telemetry.tracing import (
    get_tracer,
    set_error,
    trace_flattened_object,
    traced,
)

__all__ = [
    "OTELExporter",
    "OTELConfig",
    "create_exporter",
    "get_tracer",
    "set_error",
    "trace_flattened_object",
    "traced",
]
