"""Calendar system availability provider. Expects ``{available, events, blocks}``."""
from __future__ import annotations

from hexbooking.integration.cal import to_legacy
from hexbooking.providers.client import LegacySystemClient
from hexbooking.providers.types import ProviderResult
from hexbooking.providers.validation import to_provider_result
from hexbooking.schemas.availability import AvailabilityQuery

AVAILABILITY_ENDPOINT = "/availability"


def build_body(query: AvailabilityQuery) -> dict[str, str]:
    return {"property_id": query.property_id, **to_legacy(query.date_range)}


class CalendarProvider:
    name = "calendar"

    def __init__(self, client: LegacySystemClient):
        self._client = client

    async def check(self, query: AvailabilityQuery) -> ProviderResult:
        data = await self._client.post(AVAILABILITY_ENDPOINT, build_body(query))
        return to_provider_result(self.name, data)
