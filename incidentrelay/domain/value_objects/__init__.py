"""
Domain Value Objects

Immutable values passed across the notifier boundary.
"""

from incidentrelay.domain.value_objects.escalation_policy import (
    ESCALATION_POLICIES,
    EscalationPolicy,
    get_policy_id,
)
from incidentrelay.domain.value_objects.incident_handle import IncidentHandle
from incidentrelay.domain.value_objects.notification_result import NotificationResult

__all__ = [
    "ESCALATION_POLICIES",
    "EscalationPolicy",
    "get_policy_id",
    "IncidentHandle",
    "NotificationResult",
]
