"""Global test configuration.

Provides an in-memory OpenTelemetry tracer and a fake incident transport so
notifier tests run without network access or a global tracer provider.
"""

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (
    InMemorySpanExporter,
)

from incidentrelay.domain.ports.transport_port import TransportResponse


class FakeTransport:
    """In-memory IncidentTransportPort recording every request."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def post(self, path, body, headers=None):
        return self._handle("POST", path, body, headers)

    async def put(self, path, body, headers=None):
        return self._handle("PUT", path, body, headers)

    def _handle(self, method, path, body, headers):
        self.calls.append(
            {"method": method, "path": path, "body": body, "headers": dict(headers or {})}
        )
        if self.error is not None:
            raise self.error
        if callable(self.response):
            return self.response(method, path, body)
        if self.response is not None:
            return self.response
        return self._echo(method, path, body)

    def _echo(self, method, path, body):
        if method == "POST":
            return TransportResponse(
                status=201,
                data={
                    "incident": {
                        "id": f"INC{len(self.calls)}",
                        "incident_key": body["incident"]["incident_key"],
                    }
                },
            )
        return TransportResponse(
            status=200,
            data={"incident": {"id": path.rsplit("/", 1)[-1], "status": "resolved"}},
        )


@pytest.fixture
def fake_transport():
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def span_exporter():
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider.get_tracer("incidentrelay.tests")
    provider.shutdown()
