"""Pydantic models describing client options and the capture wire format."""

from eye_metric.models.events import CapturePayload, ClientOptions, RawEvent

__all__ = ["CapturePayload", "ClientOptions", "RawEvent"]
