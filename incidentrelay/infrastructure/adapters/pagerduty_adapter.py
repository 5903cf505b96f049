"""
PagerDuty Notification Adapter

Architectural Intent:
- Implements IncidentNotifierPort against the PagerDuty REST API
- Opens incidents (POST /incidents) and resolves them (PUT /incidents/{id})
- Best-effort: failures are logged, recorded on the trace span and returned
  as NotificationResult.failure, never raised to the caller

Design Decisions:
- HTTP goes through an injected IncidentTransportPort (httpx by default)
- Stateless across calls apart from fixed configuration, so calls may run
  concurrently
- No retries; a failed call is terminal for that invocation
- start_pagerduty_notifier() opts out (returns None) when the environment
  does not configure the integration
"""

import logging
import os
import uuid
from typing import Any, Mapping, Optional

from opentelemetry.trace import Tracer

from incidentrelay.domain.errors import (
    IncidentNotifierError,
    IncidentPolicyError,
    IncidentResponseError,
    IncidentStatusError,
    IncidentTransportError,
)
from incidentrelay.domain.ports.transport_port import (
    IncidentTransportPort,
    TransportResponse,
)
from incidentrelay.domain.value_objects.escalation_policy import (
    EscalationPolicy,
    get_policy_id,
)
from incidentrelay.domain.value_objects.incident_handle import IncidentHandle
from incidentrelay.domain.value_objects.notification_result import NotificationResult
from incidentrelay.infrastructure.adapters.httpx_transport import HttpxIncidentTransport
from incidentrelay.infrastructure.config import PagerDutyConfig
from incidentrelay.infrastructure.telemetry.tracing import (
    get_tracer,
    set_error,
    trace_flattened_object,
    traced,
)

logger = logging.getLogger(__name__)

COMPONENT_NAME = "PagerDutyNotifier"
API_KEY_ENV = "PAGER_DUTY_API_KEY"
SERVICE_ID_ENV = "PAGER_DUTY_SERVICE_ID"


class PagerDutyNotifier:
    """PagerDuty incident notifier."""

    def __init__(
        self,
        token: str,
        service_id: str,
        config: Optional[PagerDutyConfig] = None,
        transport: Optional[IncidentTransportPort] = None,
        tracer: Optional[Tracer] = None,
    ) -> None:
        """Initialize PagerDuty notifier.

        Args:
            token: PagerDuty REST API token
            service_id: Id of the PagerDuty service incidents are opened on
            config: API settings (base URL, sender address, timeout)
            transport: HTTP transport; an httpx transport is built when omitted
            tracer: OpenTelemetry tracer; the global one when omitted
        """
        self._config = config or PagerDutyConfig()
        self._service_id = service_id
        self._owns_transport = transport is None
        self._transport = transport or HttpxIncidentTransport(
            token,
            base_url=self._config.base_url,
            timeout=self._config.timeout,
        )
        self._tracer = tracer or get_tracer(__name__)

    @property
    def service_id(self) -> str:
        return self._service_id

    def _headers(self) -> dict[str, str]:
        return {"From": self._config.from_email}

    async def open_incident(
        self,
        title: str,
        message: str = "",
        policy: EscalationPolicy = EscalationPolicy.EVERYONE,
        dedup_key: Optional[str] = None,
    ) -> NotificationResult:
        """Trigger a high-urgency incident on the configured service.

        Args:
            title: Incident title
            message: Incident details
            policy: Escalation policy to page
            dedup_key: PagerDuty incident_key; a UUID4 is generated when omitted

        Returns:
            NotificationResult with the IncidentHandle if PagerDuty answered 201
        """
        if dedup_key is None:
            dedup_key = str(uuid.uuid4())
        if message is None:
            message = ""

        with traced(self._tracer, COMPONENT_NAME, "open_incident") as span:
            try:
                if not isinstance(policy, EscalationPolicy):
                    raise IncidentPolicyError("open incident", title, policy)
                policy_id = get_policy_id(policy)
                logger.info(
                    "PagerDuty open_incident: triggering '%s' ('%s') [policy=%s]",
                    title,
                    dedup_key,
                    policy.value,
                )
                request = {
                    "headers": self._headers(),
                    "data": {
                        "incident": {
                            "type": "incident",
                            "title": title,
                            "service": {
                                "id": self._service_id,
                                "type": "service_reference",
                            },
                            "urgency": "high",
                            "incident_key": dedup_key,
                            "body": {
                                "type": "incident_body",
                                "details": message,
                            },
                        },
                        "escalation_policy": {"id": policy_id},
                    },
                }
                trace_flattened_object(span, {"request": request})

                response = await self._send(
                    "post", "/incidents", request, "open incident", title
                )
                trace_flattened_object(span, {"response_body": response.data})

                if response.status != 201:
                    raise IncidentStatusError(
                        "open incident", title, response.status, response.data
                    )

                handle = _parse_handle(response.data, title)
                span.set_attribute("incident.id", handle.id)
                logger.info("PagerDuty open_incident: opened %s", handle)
                return NotificationResult.success(handle)
            except IncidentNotifierError as e:
                logger.error(
                    "PagerDuty failed to start incident '%s' ('%s'): %s",
                    title,
                    dedup_key,
                    e,
                    exc_info=e,
                )
                set_error(span, e)
                return NotificationResult.failure(e)

    async def resolve_incident(self, incident_id: str) -> NotificationResult:
        """Mark an incident as resolved.

        Args:
            incident_id: PagerDuty incident id returned by open_incident

        Returns:
            NotificationResult, ok if PagerDuty answered 200
        """
        with traced(
            self._tracer,
            COMPONENT_NAME,
            "resolve_incident",
            attributes={"incident.id": incident_id},
        ) as span:
            try:
                url = f"/incidents/{incident_id}"
                logger.info(
                    "PagerDuty resolve_incident: resolving '%s' via '%s'",
                    incident_id,
                    url,
                )
                request = {
                    "headers": self._headers(),
                    "data": {
                        "incident": {
                            "type": "incident_reference",
                            "status": "resolved",
                        }
                    },
                }
                trace_flattened_object(span, {"request": request})

                response = await self._send(
                    "put", url, request, "resolve incident", incident_id
                )
                trace_flattened_object(span, {"response_body": response.data})

                if response.status != 200:
                    raise IncidentStatusError(
                        "resolve incident", incident_id, response.status, response.data
                    )

                logger.info("PagerDuty resolve_incident: resolved '%s'", incident_id)
                return NotificationResult.success()
            except IncidentNotifierError as e:
                set_error(span, e)
                logger.error(
                    "PagerDuty failed to resolve incident '%s': %s",
                    incident_id,
                    e,
                    exc_info=e,
                )
                return NotificationResult.failure(e)

    async def _send(
        self,
        method: str,
        path: str,
        request: Mapping[str, Any],
        operation: str,
        target: str,
    ) -> TransportResponse:
        """Issue the request, normalizing transport failures."""
        send = getattr(self._transport, method)
        try:
            return await send(path, request["data"], request["headers"])
        except Exception as e:
            raise IncidentTransportError(operation, target, e) from e

    async def aclose(self) -> None:
        """Close the transport if this notifier created it."""
        if self._owns_transport:
            await self._transport.aclose()


def _parse_handle(data: Any, title: str) -> IncidentHandle:
    incident = data.get("incident") if isinstance(data, Mapping) else None
    if not isinstance(incident, Mapping):
        raise IncidentResponseError("open incident", title, data)
    incident_id = incident.get("id")
    incident_key = incident.get("incident_key")
    if not incident_id or not incident_key:
        raise IncidentResponseError("open incident", title, data)
    return IncidentHandle(id=str(incident_id), key=str(incident_key))


def start_pagerduty_notifier(
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[PagerDutyConfig] = None,
    transport: Optional[IncidentTransportPort] = None,
    tracer: Optional[Tracer] = None,
) -> Optional[PagerDutyNotifier]:
    """Build a PagerDutyNotifier if the environment configures one.

    Args:
        environ: Environment to read; os.environ when omitted
        config: API settings passed through to the notifier
        transport: Transport passed through to the notifier
        tracer: Tracer passed through to the notifier

    Returns:
        The notifier, or None when PAGER_DUTY_API_KEY or
        PAGER_DUTY_SERVICE_ID is missing
    """
    env = os.environ if environ is None else environ
    logger.info("[INIT] attempting to start pager duty")

    api_key = env.get(API_KEY_ENV)
    if not api_key:
        logger.warning(
            "[INIT] can't start pager duty - missing environment variable %s",
            API_KEY_ENV,
        )
        return None

    service_id = env.get(SERVICE_ID_ENV)
    if not service_id:
        logger.warning(
            "[INIT] can't start pager duty - missing environment variable %s",
            SERVICE_ID_ENV,
        )
        return None

    return PagerDutyNotifier(
        api_key,
        service_id,
        config=config,
        transport=transport,
        tracer=tracer,
    )
