from __future__ import annotations

import httpx

from hexbooking.providers.calendar import CalendarProvider
from hexbooking.providers.client import LegacySystemClient
from hexbooking.providers.reserve import ReserveProvider


def create_reserve_provider(
    base_url: str,
    *,
    timeout: float,
    max_retries: int = 0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ReserveProvider:
    client = LegacySystemClient(
        ReserveProvider.name,
        base_url,
        timeout=timeout,
        max_retries=max_retries,
        transport=transport,
    )
    return ReserveProvider(client)


def create_calendar_provider(
    base_url: str,
    *,
    timeout: float,
    max_retries: int = 0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CalendarProvider:
    client = LegacySystemClient(
        CalendarProvider.name,
        base_url,
        timeout=timeout,
        max_retries=max_retries,
        transport=transport,
    )
    return CalendarProvider(client)
