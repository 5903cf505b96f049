"""
Incident Transport Port

Architectural Intent:
- Abstract HTTP capability the notifier talks through
- Lets tests substitute an in-memory fake for the provider API
- Keeps the notifier free of any particular HTTP client library

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- Returns TransportResponse for any status; only transport failures raise
- Paths are relative to the provider API base URL
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class TransportResponse:
    """Status code and decoded body of a provider response."""

    status: int
    data: Any = None


@runtime_checkable
class IncidentTransportPort(Protocol):
    """Port for issuing requests against the incident provider API."""

    async def post(
        self, path: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        """POST a JSON body to path.

        Args:
            path: API path, e.g. /incidents
            body: JSON-serializable request body
            headers: Extra request headers

        Returns:
            TransportResponse with the HTTP status and decoded body
        """
        ...

    async def put(
        self, path: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        """PUT a JSON body to path. Same contract as post()."""
        ...
