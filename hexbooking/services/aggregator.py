"""
Availability aggregation across the reserve and calendar systems.

Both providers are queried concurrently and must both answer: a property is
available only when both systems say so. There is no partial result; any
provider failure fails the whole check.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Mapping

import httpx

from hexbooking.core.config import Settings
from hexbooking.core.errors import AggregationError
from hexbooking.core.logging import current_request_id
from hexbooking.domain.rules import AvailabilityRules
from hexbooking.providers.base import AvailabilityProvider
from hexbooking.providers.factory import create_calendar_provider, create_reserve_provider
from hexbooking.providers.types import ProviderResult
from hexbooking.schemas.availability import AggregatedAvailability, AvailabilityQuery, parse_query
from hexbooking.services.rules import AvailabilityRulesEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregatorConfig:
    reserve_base_url: str
    cal_base_url: str
    provider_timeout_secs: float = 5.0
    provider_max_retries: int = 0
    aggregate_timeout_secs: float = 10.0
    rules: AvailabilityRules | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "AggregatorConfig":
        return cls(
            reserve_base_url=settings.legacy_reserve_api,
            cal_base_url=settings.legacy_cal_api,
            provider_timeout_secs=settings.provider_timeout_secs,
            provider_max_retries=settings.provider_max_retries,
            aggregate_timeout_secs=settings.aggregate_timeout_secs,
        )


class AvailabilityAggregator:
    def __init__(
        self,
        config: AggregatorConfig,
        *,
        reserve: AvailabilityProvider | None = None,
        calendar: AvailabilityProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.config = config
        self.rules_engine = (
            AvailabilityRulesEngine(config.rules) if config.rules is not None else None
        )
        self._today = today
        self.reserve = reserve or create_reserve_provider(
            config.reserve_base_url,
            timeout=config.provider_timeout_secs,
            max_retries=config.provider_max_retries,
            transport=transport,
        )
        self.calendar = calendar or create_calendar_provider(
            config.cal_base_url,
            timeout=config.provider_timeout_secs,
            max_retries=config.provider_max_retries,
            transport=transport,
        )

    async def check_availability(
        self, query: AvailabilityQuery | Mapping[str, Any]
    ) -> AggregatedAvailability:
        """Validate ``query``, ask both providers, and AND their answers.

        Raises ``ValidationError`` for a malformed query or a stay the booking
        rules forbid, and ``AggregationError`` (caused by the provider's
        ``ProviderError``) when either provider fails.
        """
        q = parse_query(query)
        if self.rules_engine is not None:
            self.rules_engine.validate_all(q.date_range, today=self._today())

        try:
            reserve_res, cal_res = await asyncio.wait_for(
                asyncio.gather(
                    self.reserve.check(q),
                    self.calendar.check(q),
                    return_exceptions=True,
                ),
                timeout=self.config.aggregate_timeout_secs,
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                "Availability check for %s timed out after %ss",
                q.property_id,
                self.config.aggregate_timeout_secs,
                extra={"request_id": current_request_id()},
            )
            raise AggregationError(
                "aggregate",
                e,
                message=(
                    "Failed to check availability: providers did not answer within "
                    f"{self.config.aggregate_timeout_secs}s"
                ),
                context={"property_id": q.property_id},
            ) from e

        failures = [
            (provider.name, res)
            for provider, res in ((self.reserve, reserve_res), (self.calendar, cal_res))
            if isinstance(res, BaseException)
        ]
        if failures:
            raise self._aggregation_error(q, failures)

        result = merge(reserve_res, cal_res)
        logger.debug(
            "Availability for %s %s..%s: %s",
            q.property_id,
            q.start_date,
            q.end_date,
            result.is_available,
        )
        return result

    def _aggregation_error(
        self, q: AvailabilityQuery, failures: list[tuple[str, BaseException]]
    ) -> AggregationError:
        for name, exc in failures:
            logger.warning(
                "Provider %s failed for %s: %s",
                name,
                q.property_id,
                exc,
                extra={"provider": name, "request_id": current_request_id()},
            )

        # Cancellation and interpreter exits propagate untouched.
        for _, exc in failures:
            if not isinstance(exc, Exception):
                raise exc

        name, cause = failures[0]
        err = AggregationError(
            name,
            cause,
            message=f"Failed to check availability: {name} provider error",
            context={
                "property_id": q.property_id,
                "failures": {n: str(exc) for n, exc in failures},
            },
        )
        err.__cause__ = cause
        return err


def merge(reserve: ProviderResult, calendar: ProviderResult) -> AggregatedAvailability:
    return AggregatedAvailability(
        is_available=reserve.available and calendar.available,
        reserve_system=reserve.payload,
        cal_system=calendar.payload,
    )
