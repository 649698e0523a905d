from __future__ import annotations

from fastapi import Request

from hexbooking.services.aggregator import AvailabilityAggregator


def get_aggregator(request: Request) -> AvailabilityAggregator:
    # Built once in the app lifespan from settings.
    return request.app.state.aggregator
