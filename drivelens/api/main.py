"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from drivelens.api.middleware import MetricsMiddleware, RequestIDMiddleware
from drivelens.api.v1 import analysis, calc, eligibility, insights, inventory, plan, predict, recommend
from drivelens.config import settings
from drivelens.domain.exceptions import ProfileValidationError
from drivelens.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


async def profile_validation_handler(request: Request, exc: ProfileValidationError) -> JSONResponse:
    logging.warning(
        f"Invalid profile: {exc}",
        extra={"request_id": getattr(request.state, "request_id", "unknown"), "field": exc.field},
    )
    return JSONResponse(status_code=422, content={"detail": {"field": exc.field, "message": exc.message}})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="DriveLens",
        description="Car financing scenarios, vehicle recommendations and ownership cost projections",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(ProfileValidationError, profile_validation_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(calc.router, prefix="/v1", tags=["financing"])
    app.include_router(recommend.router, prefix="/v1", tags=["recommendations"])
    app.include_router(predict.router, prefix="/v1", tags=["financing"])
    app.include_router(plan.router, prefix="/v1", tags=["financing"])
    app.include_router(eligibility.router, prefix="/v1", tags=["eligibility"])
    app.include_router(inventory.router, prefix="/v1", tags=["recommendations"])
    app.include_router(insights.router, prefix="/v1", tags=["insights"])
    app.include_router(analysis.router, prefix="/v1", tags=["insights"])

    return app


app = create_app()
