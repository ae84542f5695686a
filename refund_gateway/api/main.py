"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from refund_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from refund_gateway.api.v1 import breakdown, calculation, institutions
from refund_gateway.infrastructure.observability.logging import setup_logging
from refund_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Premium Refund Gateway",
        description="Desgravamen and cesantía premium refund calculation service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calculation.router, prefix="/v1", tags=["calculations"])
    app.include_router(breakdown.router, prefix="/v1", tags=["breakdowns"])
    app.include_router(institutions.router, prefix="/v1", tags=["institutions"])

    return app


app = create_app()
