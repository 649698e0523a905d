from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from hexbooking.api.deps import get_aggregator
from hexbooking.schemas.availability import AggregatedAvailability, AvailabilityCheckIn
from hexbooking.services.aggregator import AvailabilityAggregator

router = APIRouter(prefix="/v1/availability", tags=["availability"])


@router.get("/check", response_model=AggregatedAvailability)
async def check_availability(
    property_id: str = Query(..., alias="propertyId"),
    start_date: str = Query(..., alias="startDate", description="YYYY-MM-DD"),
    end_date: str = Query(..., alias="endDate", description="YYYY-MM-DD"),
    aggregator: AvailabilityAggregator = Depends(get_aggregator),
) -> AggregatedAvailability:
    return await aggregator.check_availability(
        {"propertyId": property_id, "startDate": start_date, "endDate": end_date}
    )


@router.post("/check", response_model=AggregatedAvailability)
async def check_availability_post(
    body: AvailabilityCheckIn,
    aggregator: AvailabilityAggregator = Depends(get_aggregator),
) -> AggregatedAvailability:
    return await aggregator.check_availability(body.model_dump(by_alias=True))
