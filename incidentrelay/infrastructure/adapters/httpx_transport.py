"""
HTTPX Incident Transport

Architectural Intent:
- Implements IncidentTransportPort on top of httpx.AsyncClient
- Carries the PagerDuty REST API authentication and content negotiation

Design Decisions:
- Never raises for HTTP status codes; the notifier decides what success is
- httpx.HTTPError (connect, timeout, protocol) propagates to the caller
- A client can be injected (e.g. with httpx.MockTransport) for tests
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from incidentrelay.domain.ports.transport_port import TransportResponse
from incidentrelay.infrastructure.config import DEFAULT_PAGERDUTY_URL

logger = logging.getLogger(__name__)

PAGERDUTY_ACCEPT = "application/vnd.pagerduty+json;version=2"


class HttpxIncidentTransport:
    """PagerDuty REST transport backed by httpx."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_PAGERDUTY_URL,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the transport.

        Args:
            token: PagerDuty REST API token
            base_url: API root, requests are made relative to it
            timeout: Per-request timeout in seconds
            client: Preconfigured client; one is created when omitted
        """
        self._base_url = base_url
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._headers = {
            "Authorization": f"Token token={token}",
            "Accept": PAGERDUTY_ACCEPT,
            "Content-Type": "application/json",
        }

    async def post(
        self, path: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        return await self._request("POST", path, body, headers)

    async def put(
        self, path: str, body: Mapping[str, Any], headers: Optional[Mapping[str, str]] = None
    ) -> TransportResponse:
        return await self._request("PUT", path, body, headers)

    async def _request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any],
        headers: Optional[Mapping[str, str]],
    ) -> TransportResponse:
        merged = {**self._headers, **(headers or {})}
        logger.debug("%s %s%s", method, self._base_url, path)
        response = await self._client.request(method, path, json=dict(body), headers=merged)
        return TransportResponse(status=response.status_code, data=_decode(response))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxIncidentTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def _decode(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to text for non-JSON responses."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text
