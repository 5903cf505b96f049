"""
Notification Result Value Object

Architectural Intent:
- Makes the best-effort contract of the notifier visible in its signature
- A failed notification is a value, not an exception

Design Decisions:
- success() optionally carries the IncidentHandle (open) or nothing (resolve)
- failure() carries the normalized IncidentNotifierError for inspection
- A failure does not mean the incident was not created upstream, only that
  delivery could not be confirmed
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from incidentrelay.domain.errors import IncidentNotifierError
from incidentrelay.domain.value_objects.incident_handle import IncidentHandle


@dataclass(frozen=True)
class NotificationResult:
    """Outcome of a single notifier call."""

    handle: Optional[IncidentHandle] = None
    error: Optional[IncidentNotifierError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @staticmethod
    def success(handle: Optional[IncidentHandle] = None) -> NotificationResult:
        return NotificationResult(handle=handle)

    @staticmethod
    def failure(error: IncidentNotifierError) -> NotificationResult:
        return NotificationResult(error=error)

    def __bool__(self) -> bool:
        return self.ok
