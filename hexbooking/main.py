from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hexbooking.api.errors import register_exception_handlers
from hexbooking.api.router import api_router
from hexbooking.core.config import settings
from hexbooking.core.logging import configure_logging
from hexbooking.core.otel import init_otel
from hexbooking.middleware.request_id import RequestIdMiddleware
from hexbooking.services.aggregator import AggregatorConfig, AvailabilityAggregator

configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.aggregator = AvailabilityAggregator(AggregatorConfig.from_settings(settings))
    yield


app = FastAPI(title=settings.api_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)
app.include_router(api_router)

init_otel(app, settings)
