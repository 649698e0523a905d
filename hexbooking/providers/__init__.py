"""
Legacy availability providers: the reserve system and the calendar system.
Each posts its own request body but returns the same ProviderResult shape.
"""
from hexbooking.providers.base import AvailabilityProvider
from hexbooking.providers.calendar import CalendarProvider
from hexbooking.providers.client import LegacySystemClient
from hexbooking.providers.factory import create_calendar_provider, create_reserve_provider
from hexbooking.providers.reserve import ReserveProvider
from hexbooking.providers.types import ProviderResult

__all__ = [
    "AvailabilityProvider",
    "CalendarProvider",
    "LegacySystemClient",
    "ProviderResult",
    "ReserveProvider",
    "create_calendar_provider",
    "create_reserve_provider",
]
