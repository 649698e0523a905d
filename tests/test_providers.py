import json

import httpx
import pytest

from hexbooking.core.errors import ProviderError
from hexbooking.providers import LegacySystemClient, create_calendar_provider, create_reserve_provider
from hexbooking.schemas.availability import parse_query

QUERY = parse_query({"propertyId": "p-9", "startDate": "2024-03-01", "endDate": "2024-03-04"})


def _client(handler, **kwargs):
    return LegacySystemClient(
        "reserve", "http://reserve.test/", transport=httpx.MockTransport(handler), **kwargs
    )


@pytest.mark.asyncio
async def test_client_posts_json_to_endpoint():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    data = await _client(handler).post("/availability", {"a": 1})

    assert data == {"ok": True}
    assert str(seen[0].url) == "http://reserve.test/availability"
    assert seen[0].headers["Content-Type"] == "application/json"
    assert json.loads(seen[0].content) == {"a": 1}


@pytest.mark.parametrize("status", [400, 404, 500, 503])
@pytest.mark.asyncio
async def test_client_raises_on_error_status(status):
    client = _client(lambda r: httpx.Response(status, json={"error": "x"}))

    with pytest.raises(ProviderError) as ei:
        await client.post("/availability", {})

    assert ei.value.status_code == status
    assert ei.value.provider == "reserve"


@pytest.mark.asyncio
async def test_client_raises_on_non_json_body():
    client = _client(lambda r: httpx.Response(200, content=b"not json"))

    with pytest.raises(ProviderError, match="malformed JSON"):
        await client.post("/availability", {})


@pytest.mark.asyncio
async def test_client_raises_on_non_object_json():
    client = _client(lambda r: httpx.Response(200, json=[1, 2]))

    with pytest.raises(ProviderError, match="expected a JSON object"):
        await client.post("/availability", {})


@pytest.mark.asyncio
async def test_client_raises_on_transport_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(ProviderError, match="unreachable") as ei:
        await _client(handler).post("/availability", {})

    assert isinstance(ei.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_client_raises_on_timeout():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ProviderError, match="timed out"):
        await _client(handler, timeout=0.5).post("/availability", {})


@pytest.mark.asyncio
async def test_client_retries_with_backoff(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr("hexbooking.providers.client.asyncio.sleep", fake_sleep)
    attempts = []

    def handler(request):
        attempts.append(request)
        if len(attempts) < 3:
            return httpx.Response(502, json={})
        return httpx.Response(200, json={"available": True})

    data = await _client(handler, max_retries=3).post("/availability", {})

    assert data == {"available": True}
    assert len(attempts) == 3
    assert delays == [0.2, 0.4]


@pytest.mark.asyncio
async def test_client_does_not_retry_by_default():
    attempts = []

    def handler(request):
        attempts.append(request)
        return httpx.Response(500, json={})

    with pytest.raises(ProviderError):
        await _client(handler).post("/availability", {})

    assert len(attempts) == 1


@pytest.mark.asyncio
async def test_reserve_provider_body_and_result():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"available": True, "price": 120, "restrictions": None})

    provider = create_reserve_provider(
        "http://reserve.test", timeout=1.0, transport=httpx.MockTransport(handler)
    )
    result = await provider.check(QUERY)

    assert result.provider == "reserve"
    assert result.available is True
    assert result.payload == {"available": True, "price": 120, "restrictions": None}
    assert json.loads(seen[0].content) == {
        "property_id": "p-9",
        "date_from": "2024-03-01",
        "date_to": "2024-03-04",
    }


@pytest.mark.asyncio
async def test_calendar_provider_body():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"available": False, "events": [], "blocks": []})

    provider = create_calendar_provider(
        "http://cal.test", timeout=1.0, transport=httpx.MockTransport(handler)
    )
    result = await provider.check(QUERY)

    assert result.available is False
    assert bodies == [{"property_id": "p-9", "start_date": "2024-03-01", "end_date": "2024-03-04"}]


@pytest.mark.parametrize(
    "payload",
    [
        {"price": 100},
        {"available": "true"},
        {"available": 1},
        {"available": None},
    ],
)
@pytest.mark.asyncio
async def test_provider_rejects_invalid_available_flag(payload):
    provider = create_reserve_provider(
        "http://reserve.test",
        timeout=1.0,
        transport=httpx.MockTransport(lambda r: httpx.Response(200, json=payload)),
    )

    with pytest.raises(ProviderError, match="invalid availability payload"):
        await provider.check(QUERY)
