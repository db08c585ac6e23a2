"""Exception hierarchy raised by the analytics client."""

from __future__ import annotations

from typing import Optional


class EyeMetricError(Exception):
    """Base class for every error raised by ``eye_metric``."""


class ConfigurationError(EyeMetricError):
    """The client was constructed without a usable ``endpoint``."""


class ValidationError(EyeMetricError):
    """Caller input was rejected before any network activity."""


class DeliveryError(EyeMetricError):
    """The collection endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, status_text: str, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.message = message
        detail = f"Failed to send analytics: {status_code} {status_text}"
        if message:
            detail += f". {message}"
        super().__init__(detail)


class TransportError(EyeMetricError):
    """The request never produced a response (DNS, connect, timeout, ...).

    The underlying ``httpx`` exception is kept on ``original`` and chained as
    ``__cause__``.
    """

    def __init__(self, original: BaseException) -> None:
        self.original = original
        super().__init__(f"Error sending analytics: {original}")
