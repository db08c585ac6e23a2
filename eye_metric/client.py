"""Async client that ships analytics events to an Eye Metric endpoint.

Each ``capture`` / ``capture_batch`` call results in at most one
``POST {endpoint}/capture``.  There is no queue, no retry and no background
task: the coroutine finishes when the collector has answered.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Dict, Optional

import httpx
from pydantic_core import PydanticSerializationError

from eye_metric.errors import ConfigurationError, DeliveryError, TransportError, ValidationError
from eye_metric.models.events import CapturePayload, ClientOptions, RawEvent
from eye_metric.settings import API_KEY_ENV_VAR, normalize_endpoint, resolve_api_key
from eye_metric.utils.logger import logger
from eye_metric.utils.utils import generate_uuid, now_iso_timestamp


class AnalyticsClient:
    """Client for sending analytics events to the Eye Metric service.

    Args:
        endpoint: Base URL of the Eye Metric API (required).
        api_key: API key; falls back to the ``EYE_METRIC_API_KEY`` env var.
        distinct_id: Identifier for the current user/session, generated when
            omitted.
        http_client: Optional caller-owned ``httpx.AsyncClient`` reused for
            every request.  The caller is responsible for closing it.
        timeout: Seconds forwarded to the per-request ``httpx.AsyncClient``
            when *http_client* is not given.  ``None`` keeps httpx's default.

    Example::

        client = AnalyticsClient("https://metrics.example.com", api_key="em_...")
        await client.capture("user_signed_up", {"plan": "pro"})
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        distinct_id: Optional[str] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if not endpoint or not isinstance(endpoint, str):
            raise ConfigurationError("endpoint is required")

        self._api_key = resolve_api_key(api_key)
        self._endpoint = normalize_endpoint(endpoint)
        self._distinct_id = distinct_id or generate_uuid()
        self._http_client = http_client
        self._timeout = timeout

    @classmethod
    def from_options(cls, options: ClientOptions, **kwargs: Any) -> "AnalyticsClient":
        return cls(
            endpoint=options.endpoint,
            api_key=options.api_key,
            distinct_id=options.distinct_id,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Read-only configuration
    # ------------------------------------------------------------------

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def distinct_id(self) -> str:
        return self._distinct_id

    @property
    def capture_url(self) -> str:
        return f"{self._endpoint}/capture"

    def get_distinct_id(self) -> str:
        """Return the distinct ID for the current user/session."""
        return self._distinct_id

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def capture(self, event: str, properties: Optional[Mapping[str, Any]] = None) -> None:
        """Track a single event.

        Raises:
            ValidationError: *event* is empty or not a string, or *properties*
                is not a mapping.
            DeliveryError: the endpoint answered with a non-2xx status.
            TransportError: the request could not be completed.
        """
        if not event or not isinstance(event, str):
            raise ValidationError("Event name is required")
        if properties is None:
            properties = {}
        elif not isinstance(properties, Mapping):
            raise ValidationError("properties must be a mapping")

        payload = CapturePayload(
            api_key=self._api_key,
            event=event,
            properties=dict(properties),
            distinct_id=self._distinct_id,
            timestamp=now_iso_timestamp(),
        )
        await self._send(payload)

    async def capture_batch(self, events: Sequence[Mapping[str, Any] | RawEvent]) -> None:
        """Track several events in one request.

        Input order is preserved.  ``distinct_id`` and ``timestamp`` are filled
        in per event when missing; every other key is sent unchanged.  An empty
        sequence returns without touching the network.
        """
        if not isinstance(events, Sequence) or isinstance(events, (str, bytes, bytearray)):
            raise ValidationError("Events must be a list")
        if len(events) == 0:
            return

        batch = [self._with_defaults(item) for item in events]
        payload = CapturePayload(api_key=self._api_key, batch=batch)
        await self._send(payload)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _with_defaults(self, item: Mapping[str, Any] | RawEvent) -> Dict[str, Any]:
        if isinstance(item, RawEvent):
            data = item.model_dump(exclude_none=True)
        elif isinstance(item, Mapping):
            data = dict(item)
        else:
            raise ValidationError(f"Batch items must be mappings, got {type(item).__name__}")

        data["distinct_id"] = data.get("distinct_id") or self._distinct_id
        data["timestamp"] = data.get("timestamp") or now_iso_timestamp()
        return data

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(self.capture_url, headers=self._headers(), json=body)

        client_kwargs: Dict[str, Any] = {}
        if self._timeout is not None:
            client_kwargs["timeout"] = self._timeout
        async with httpx.AsyncClient(**client_kwargs) as client:
            return await client.post(self.capture_url, headers=self._headers(), json=body)

    async def _send(self, payload: CapturePayload) -> None:
        if not self._api_key:
            logger.warning(
                "analytics.missing_api_key",
                extra={
                    "env_var": API_KEY_ENV_VAR,
                    "hint": f"Set {API_KEY_ENV_VAR} environment variable or pass api_key in options.",
                },
            )

        try:
            body = payload.to_wire()
        except PydanticSerializationError as exc:
            logger.error("analytics.serialize_failed", extra={"error": str(exc), "url": self.capture_url})
            raise ValidationError(f"properties must be JSON-serialisable: {exc}") from exc

        try:
            response = await self._post(body)
        except httpx.HTTPError as exc:
            logger.error(
                "analytics.transport_failed",
                extra={"error": str(exc), "error_type": type(exc).__name__, "url": self.capture_url},
            )
            raise TransportError(exc) from exc

        if response.is_success:
            return

        message: Optional[str] = None
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict) and "message" in data:
            message = str(data["message"])

        error = DeliveryError(response.status_code, response.reason_phrase, message)
        logger.error(
            "analytics.send_failed",
            extra={"status_code": response.status_code, "detail": message, "url": self.capture_url},
        )
        raise error
