from __future__ import annotations

"""Pytest fixtures for the analytics client.

HTTP is served by ``httpx.MockTransport`` so every test exercises the real
request pipeline without touching the network.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

# Ensure project root on PYTHONPATH so `import eye_metric` works when pytest is run
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from eye_metric import AnalyticsClient  # noqa: E402

ENDPOINT = "https://metrics.test"


class CollectorStub:
    """Records every request and answers with a configurable response."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"status": "ok"}
        self.error: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_json(self) -> Dict[str, Any]:
        return json.loads(self.requests[-1].content)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_api_key_env(monkeypatch):
    monkeypatch.delenv("EYE_METRIC_API_KEY", raising=False)
    yield


@pytest.fixture()
def collector() -> CollectorStub:
    return CollectorStub()


@pytest.fixture()
def make_client(collector) -> Callable[..., AnalyticsClient]:  # noqa: D401
    """Factory building clients wired to the collector stub."""

    def _make(**kwargs: Any) -> AnalyticsClient:
        kwargs.setdefault("endpoint", ENDPOINT)
        kwargs.setdefault("api_key", "em_test_key")
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(collector.handler))
        return AnalyticsClient(http_client=http_client, **kwargs)

    return _make
