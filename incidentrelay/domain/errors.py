"""
Notifier Errors

Architectural Intent:
- Single local error family for everything that can go wrong talking to the
  incident provider
- Raised inside the notifier, never propagated past it
"""

import json
from typing import Any


def _serialize_body(body: Any) -> str:
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    try:
        return json.dumps(body, sort_keys=True, default=str)
    except (TypeError, ValueError):
        return repr(body)


class IncidentNotifierError(Exception):
    """Base error for incident notification failures."""


class IncidentStatusError(IncidentNotifierError):
    """The provider answered with an unexpected HTTP status."""

    def __init__(self, operation: str, target: str, status: int, body: Any = None) -> None:
        self.operation = operation
        self.target = target
        self.status = status
        self.body = body
        super().__init__(
            f"failed to {operation} ({target}): status {status}: {_serialize_body(body)}"
        )


class IncidentTransportError(IncidentNotifierError):
    """The HTTP transport raised before a response was received."""

    def __init__(self, operation: str, target: str, cause: BaseException) -> None:
        self.operation = operation
        self.target = target
        super().__init__(f"failed to {operation} ({target}): {type(cause).__name__}: {cause}")


class IncidentResponseError(IncidentNotifierError):
    """A success status arrived without the expected incident payload."""

    def __init__(self, operation: str, target: str, body: Any = None) -> None:
        self.operation = operation
        self.target = target
        self.body = body
        super().__init__(
            f"unexpected response to {operation} ({target}): {_serialize_body(body)}"
        )


class IncidentPolicyError(IncidentNotifierError):
    """The escalation policy is not a known EscalationPolicy."""

    def __init__(self, operation: str, target: str, policy: Any) -> None:
        self.operation = operation
        self.target = target
        self.policy = policy
        super().__init__(f"failed to {operation} ({target}): unknown escalation policy {policy!r}")
