"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from incidentrelay.domain.ports.notification_port import IncidentNotifierPort
from incidentrelay.domain.ports.transport_port import (
    IncidentTransportPort,
    TransportResponse,
)

__all__ = [
    "IncidentNotifierPort",
    "IncidentTransportPort",
    "TransportResponse",
]
