"""
Error envelope - Maps failures to ``{"error": {"code", "message"}}``.

Client rejections become 400, infrastructure faults 500. Infrastructure
details stay in the logs and never reach the response body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.exceptions import RegistrationRejected, StoreUnavailable

logger = logging.getLogger(__name__)


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def internal_error() -> JSONResponse:
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error"
    )


async def registration_rejected_handler(request: Request, exc: RegistrationRejected) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, exc.code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, "bad_request", "Invalid request body")


async def store_unavailable_handler(request: Request, exc: StoreUnavailable) -> JSONResponse:
    logger.error(f"Registration store unavailable on {request.url.path}: {exc}")
    return internal_error()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.url.path}")
    return internal_error()


def install_error_handlers(app: FastAPI) -> None:
    """Register the error envelope handlers on an application."""
    app.add_exception_handler(RegistrationRejected, registration_rejected_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StoreUnavailable, store_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
