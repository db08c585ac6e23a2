from __future__ import annotations

"""Client configuration helpers (env → values).

Resolution happens once, when an ``AnalyticsClient`` is constructed.  Keep this
module free of heavy imports so it can be used from scripts as well.
"""

# Standard library
import os

__all__ = ["API_KEY_ENV_VAR", "normalize_endpoint", "resolve_api_key"]

API_KEY_ENV_VAR = "EYE_METRIC_API_KEY"


def resolve_api_key(explicit: str | None = None) -> str | None:
    """Return the explicit key, else the ``EYE_METRIC_API_KEY`` env var.

    Empty strings count as unset on both paths so that ``EYE_METRIC_API_KEY=``
    in a ``.env`` file does not produce an empty bearer token.
    """
    if explicit:
        return explicit
    return os.getenv(API_KEY_ENV_VAR) or None


def normalize_endpoint(endpoint: str) -> str:
    """Strip every trailing ``/`` from *endpoint*.

    Examples:
        >>> normalize_endpoint("https://metrics.example.com///")
        'https://metrics.example.com'
    """
    return endpoint.rstrip("/")
