"""
Incident Notifier Port

Architectural Intent:
- Abstract interface for opening and resolving incidents on an on-call provider
- Callers depend on this port, not on PagerDuty specifics

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Best-effort contract: methods never raise, they return NotificationResult
- dedup_key is optional; implementations generate one when absent
"""

from typing import Optional, Protocol, runtime_checkable

from incidentrelay.domain.value_objects.escalation_policy import EscalationPolicy
from incidentrelay.domain.value_objects.notification_result import NotificationResult


@runtime_checkable
class IncidentNotifierPort(Protocol):
    """Port for opening and resolving incidents on an external on-call service."""

    async def open_incident(
        self,
        title: str,
        message: str = "",
        policy: EscalationPolicy = EscalationPolicy.EVERYONE,
        dedup_key: Optional[str] = None,
    ) -> NotificationResult:
        """Open an incident.

        Args:
            title: Incident title
            message: Incident details
            policy: Escalation policy to page
            dedup_key: Deduplication key; generated when omitted

        Returns:
            NotificationResult carrying the IncidentHandle on success
        """
        ...

    async def resolve_incident(self, incident_id: str) -> NotificationResult:
        """Resolve a previously opened incident.

        Args:
            incident_id: Provider-assigned id returned by open_incident

        Returns:
            NotificationResult without a handle
        """
        ...
