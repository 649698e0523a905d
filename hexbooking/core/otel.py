from __future__ import annotations

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from hexbooking import __version__
from hexbooking.core.config import Settings

# Liveness probes would otherwise dominate the trace volume.
EXCLUDED_URLS = "health"


def build_resource(settings: Settings) -> Resource:
    return Resource.create(
        {
            "service.name": settings.api_name,
            "service.version": __version__,
            "deployment.environment": settings.env,
        }
    )


def init_otel(app: FastAPI, settings: Settings) -> bool:
    """Trace inbound requests and the outbound calls to the legacy systems.

    Returns ``False`` without touching global tracing state when disabled.
    """
    if not settings.otel_enabled:
        return False

    provider = TracerProvider(resource=build_resource(settings))

    endpoint = settings.otel_otlp_endpoint
    exporter = OTLPSpanExporter(endpoint=endpoint) if endpoint else OTLPSpanExporter()

    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)

    # Provider calls show up as child spans of the inbound request.
    FastAPIInstrumentor.instrument_app(app, excluded_urls=EXCLUDED_URLS)
    HTTPXClientInstrumentor().instrument()
    return True
