"""
Composition Root

Architectural Intent:
- Dependency injection composition root for incidentrelay
- Single place where configuration, telemetry and the notifier are wired
- No adapter instantiation should occur outside this module (except tests)

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- notifier is None when the PagerDuty integration is not configured
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from incidentrelay.infrastructure.adapters.pagerduty_adapter import (
    PagerDutyNotifier,
    start_pagerduty_notifier,
)
from incidentrelay.infrastructure.config import IncidentRelayConfig, load_config
from incidentrelay.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    create_exporter,
)


@dataclass
class IncidentRelayContainer:
    """DI container holding all wired dependencies."""

    config: IncidentRelayConfig
    exporter: OTELExporter
    notifier: Optional[PagerDutyNotifier]

    async def aclose(self) -> None:
        if self.notifier is not None:
            await self.notifier.aclose()
        self.exporter.shutdown()


def create_container(
    config: Optional[IncidentRelayConfig] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> IncidentRelayContainer:
    """Create and wire all dependencies."""
    config = config or load_config()
    exporter = create_exporter(
        endpoint=config.telemetry.endpoint,
        service_name=config.telemetry.service_name,
        insecure=config.telemetry.insecure,
    )
    notifier = start_pagerduty_notifier(
        environ=environ,
        config=config.pagerduty,
        tracer=exporter.tracer("incidentrelay.notifier"),
    )
    return IncidentRelayContainer(
        config=config,
        exporter=exporter,
        notifier=notifier,
    )
