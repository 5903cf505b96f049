"""
OpenTelemetry Exporter for incidentrelay

Architectural Intent:
- Installs an OpenTelemetry TracerProvider exporting to an OTLP backend
- Notifier spans are recorded through the API either way; without an
  endpoint they go to the default no-op provider

Security:
- Endpoint defaults to empty string (must be explicitly configured)
- Non-localhost http:// endpoints rejected unless insecure=True
- Validation in __post_init__ prevents accidental plaintext export
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Any
from urllib.parse import urlparse
import logging

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource, SERVICE_NAME

logger = logging.getLogger(__name__)


@dataclass
class OTELConfig:
    endpoint: str = ""
    service_name: str = "incidentrelay"
    environment: str = "development"
    insecure: bool = False

    def __post_init__(self) -> None:
        if self.endpoint:
            parsed = urlparse(self.endpoint)
            is_localhost = parsed.hostname in ("localhost", "127.0.0.1", "::1")
            if parsed.scheme == "http" and not is_localhost and not self.insecure:
                raise ValueError(
                    f"Non-localhost HTTP endpoint '{self.endpoint}' requires "
                    "insecure=True or use https://. "
                    "Set insecure=True to explicitly allow plaintext export."
                )


class OTELExporter:
    """
    OpenTelemetry trace exporter.

    Owns the TracerProvider it installs so it can flush and shut it down.
    """

    def __init__(self, config: OTELConfig):
        self.config = config
        self._initialized = False
        self._provider: Optional[TracerProvider] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Install a TracerProvider with an OTLP span exporter."""
        if not self.config.endpoint:
            logger.info("OTEL endpoint not configured, trace export disabled")
            return

        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
            OTLPSpanExporter,
        )

        resource = Resource(
            attributes={
                SERVICE_NAME: self.config.service_name,
                "environment": self.config.environment,
            }
        )
        provider = TracerProvider(resource=resource)
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=self.config.endpoint, insecure=self.config.insecure
                )
            )
        )
        trace.set_tracer_provider(provider)
        self._provider = provider
        self._initialized = True
        logger.info("OTEL trace export enabled to %s", self.config.endpoint)

    def tracer(self, name: str = "incidentrelay") -> Any:
        if self._provider is not None:
            return self._provider.get_tracer(name)
        return trace.get_tracer(name)

    def shutdown(self) -> None:
        """Flush pending spans and stop the provider."""
        if self._provider is None:
            return
        self._provider.force_flush()
        self._provider.shutdown()
        self._provider = None
        self._initialized = False


def create_exporter(
    endpoint: Optional[str] = None,
    service_name: str = "incidentrelay",
    insecure: bool = False,
) -> OTELExporter:
    """Factory function to create and initialize an OTEL exporter."""
    config = OTELConfig(
        endpoint=endpoint or "",
        service_name=service_name,
        insecure=insecure,
    )
    exporter = OTELExporter(config)
    exporter.initialize()
    return exporter
