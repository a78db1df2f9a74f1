"""Change Investigator — FastAPI service entry point."""

from __future__ import annotations

from fastapi import FastAPI
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.responses import Response

from investigator.config import settings
from investigator.ingestion.receiver import router as investigation_router
from investigator.middleware import MetricsMiddleware
from investigator.telemetry.logging import setup_logging
from investigator.telemetry.metrics import get_metrics
from investigator.telemetry.tracing import setup_tracing

if settings.otlp_endpoint:
    setup_tracing(otlp_endpoint=settings.otlp_endpoint)
logger = setup_logging(otlp_endpoint=settings.otlp_endpoint, level=settings.log_level.upper())

app = FastAPI(
    title="Change Investigator",
    description="Evidence correlation and root cause inference for deployment changes",
    version=settings.service_version,
)

app.add_middleware(MetricsMiddleware)
app.include_router(investigation_router)


@app.get("/health")
async def health():
    return {"status": "healthy", "service": settings.service_name, "version": settings.service_version}


@app.get("/metrics", include_in_schema=False)
async def metrics():
    body, content_type = get_metrics()
    return Response(content=body, media_type=content_type)


FastAPIInstrumentor.instrument_app(app)

logger.info("Change Investigator started")


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
