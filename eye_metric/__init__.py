"""Top-level package for the Eye Metric analytics client."""

__all__ = [
    "AnalyticsClient",
    "CapturePayload",
    "ClientOptions",
    "ConfigurationError",
    "DeliveryError",
    "EyeMetricError",
    "RawEvent",
    "TransportError",
    "ValidationError",
]

from dotenv import load_dotenv
load_dotenv()

from eye_metric.client import AnalyticsClient  # noqa: E402
from eye_metric.errors import (  # noqa: E402
    ConfigurationError,
    DeliveryError,
    EyeMetricError,
    TransportError,
    ValidationError,
)
from eye_metric.models.events import CapturePayload, ClientOptions, RawEvent  # noqa: E402
