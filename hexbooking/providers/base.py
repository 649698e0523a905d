from __future__ import annotations

from typing import Protocol

from hexbooking.providers.types import ProviderResult
from hexbooking.schemas.availability import AvailabilityQuery


class AvailabilityProvider(Protocol):
    """A legacy availability system queried by property and date range."""

    name: str

    async def check(self, query: AvailabilityQuery) -> ProviderResult: ...
