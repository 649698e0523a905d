from __future__ import annotations

from fastapi import APIRouter

from hexbooking.api.routes import availability, health

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(availability.router)
