import inspect
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from hexbooking.api.deps import get_aggregator
from hexbooking.main import app
from hexbooking.services.aggregator import AggregatorConfig, AvailabilityAggregator

RESERVE_HOST = "reserve.test"
CAL_HOST = "cal.test"


def reply(status_code=200, payload=None, *, content=None):
    """Handler answering every request with a fresh response."""

    def handler(request: httpx.Request) -> httpx.Response:
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=payload)

    return handler


def fail(exc_type=httpx.ConnectError, message="connection refused"):
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type(message, request=request)

    return handler


class FakeUpstreams:
    """Routes mock requests to per-host handlers and records what was sent."""

    def __init__(self):
        self.handlers = {
            RESERVE_HOST: reply(200, {"available": True, "price": 100, "restrictions": []}),
            CAL_HOST: reply(200, {"available": True, "events": [], "blocks": []}),
        }
        self.requests: list[httpx.Request] = []

    def set(self, host: str, handler):
        self.handlers[host] = handler

    def bodies(self, host: str) -> list[dict]:
        return [json.loads(r.content) for r in self.requests if r.url.host == host]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.handlers[request.url.host](request)
        if inspect.isawaitable(result):
            result = await result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture()
def upstreams():
    return FakeUpstreams()


@pytest.fixture()
def config():
    return AggregatorConfig(
        reserve_base_url=f"http://{RESERVE_HOST}",
        cal_base_url=f"http://{CAL_HOST}",
        provider_timeout_secs=1.0,
        aggregate_timeout_secs=2.0,
    )


@pytest.fixture()
def aggregator(config, upstreams):
    return AvailabilityAggregator(config, transport=upstreams.transport)


@pytest.fixture()
def client(aggregator):
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
