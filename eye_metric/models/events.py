from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientOptions(BaseModel):
    """Options accepted by ``AnalyticsClient.from_options``."""

    model_config = ConfigDict(frozen=True)

    endpoint: Optional[str] = Field(None, description="Base URL of the Eye Metric API")
    api_key: Optional[str] = Field(None, description="Falls back to EYE_METRIC_API_KEY")
    distinct_id: Optional[str] = Field(None, description="Auto-generated when omitted")


class RawEvent(BaseModel):
    """Single analytics event as submitted inside a batch.

    Unknown keys are kept and sent as-is.
    """

    model_config = ConfigDict(extra="allow")

    event: str
    properties: Optional[Dict[str, Any]] = None
    distinct_id: Optional[str] = None
    timestamp: Optional[str] = None


class CapturePayload(BaseModel):
    """JSON body for ``POST {endpoint}/capture``.

    Either the single-event fields (``event``, ``properties``, ``distinct_id``,
    ``timestamp``) or ``batch`` are populated, never both.
    """

    api_key: Optional[str] = None
    event: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None
    distinct_id: Optional[str] = None
    timestamp: Optional[str] = None
    batch: Optional[List[Dict[str, Any]]] = None

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)
