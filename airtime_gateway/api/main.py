"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from airtime_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from airtime_gateway.api.v1 import admin, claims
from airtime_gateway.domain.exceptions import ForbiddenError, ValidationError
from airtime_gateway.domain.ledger import ClaimLedger
from airtime_gateway.infrastructure.observability.logging import setup_logging
from airtime_gateway.infrastructure.observability.metrics import record_site_state
from airtime_gateway.config import Settings, settings

# Setup structured logging
setup_logging(settings.log_level)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app_settings = app_settings or settings

    app = FastAPI(
        title="Airtime Gateway",
        description="Quota-gated airtime top-up proxy with a PIN-protected admin channel",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Shared state for the lifetime of this app
    app.state.settings = app_settings
    app.state.ledger = ClaimLedger(
        is_online=app_settings.site_online,
        claim_limit=app_settings.default_claim_limit,
    )
    record_site_state(app.state.ledger.snapshot())

    if not app_settings.api_key:
        logging.warning("API_KEY environment variable is not set! Airtime API calls will fail until it is configured.")

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ForbiddenError)
    async def forbidden_handler(request: Request, exc: ForbiddenError):
        return _error(403, str(exc))

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request body.")

    @app.get("/")
    def root():
        return {"message": "Airtime Gateway is running!"}

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": app_settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(claims.router, tags=["claims"])
    app.include_router(admin.router, prefix="/admin", tags=["admin"])

    return app


app = create_app()
