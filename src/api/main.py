"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.adapters.captcha.hcaptcha import HCaptchaVerifier
from src.adapters.repository.factory import open_registration_store
from src.api.errors import error_response, install_error_handlers
from src.api.models import ErrorResponse, HealthResponse
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings
from src.domain.exceptions import ConfigurationError, StoreUnavailable

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Event Registration API v1 - Register by email and receive a ticket number",
    },
]


def build_captcha_verifier(settings: Settings) -> HCaptchaVerifier | None:
    """Create the captcha verifier when enforcement is enabled."""
    if not settings.captcha_enabled:
        return None
    if not settings.hcaptcha_secret_key:
        raise ConfigurationError("CAPTCHA_ENABLED requires HCAPTCHA_SECRET_KEY")
    return HCaptchaVerifier(
        secret=settings.hcaptcha_secret_key,
        verify_url=settings.captcha_verify_url,
        timeout=settings.captcha_timeout_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Selects and opens the registration store on startup
    - Creates the captcha verifier when enforcement is on
    - Closes both on shutdown
    """
    settings = get_settings()

    logger.info("Starting application...")

    captcha = build_captcha_verifier(settings)
    store, close_store = open_registration_store(settings)

    # Store adapters in app state for dependency injection
    app.state.store = store
    app.state.captcha = captcha

    logger.info(f"Application startup complete (backend={store.backend}, captcha={captcha is not None})")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if captcha is not None:
        await captcha.aclose()
    close_store()
    logger.info("Registration store closed")


app = FastAPI(
    title="queuepass",
    description="Event Registration API - Idempotent sign-up with sequential ticket numbers",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

install_error_handlers(app)

# Include v1 API routes; the session cookie is scoped to /api
app.include_router(v1_router, prefix="/api/v1")


@app.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": ErrorResponse, "description": "Registration store unavailable"}},
)
async def health_check(request: Request) -> HealthResponse | JSONResponse:
    """
    Health check endpoint with store validation.

    Returns 200 OK if application and registration store are healthy.
    """
    store = request.app.state.store
    try:
        store.ping()
    except StoreUnavailable as e:
        logger.error(f"Health check failed: {e}")
        return error_response(
            status.HTTP_503_SERVICE_UNAVAILABLE, "store_unavailable", "Registration store unavailable"
        )

    return HealthResponse(status="healthy", backend=store.backend)
