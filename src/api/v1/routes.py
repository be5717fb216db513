"""
API v1 routes.

Defines REST endpoints for the event registration API.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_registration_service
from src.api.errors import error_response
from src.api.models import ErrorResponse, RegisterRequest, RegistrationResponse
from src.api.session import issue_session_cookie
from src.config.settings import Settings, get_settings
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegistrationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    responses={
        200: {"model": RegistrationResponse, "description": "Email already registered"},
        400: {"model": ErrorResponse, "description": "Invalid email, captcha or body"},
        500: {"model": ErrorResponse, "description": "Registration store unavailable"},
    },
    summary="Register for the event",
    description="Register an email address and receive a ticket number. "
    "Repeated requests for the same email return the original registration.",
)
async def register(
    request_data: RegisterRequest,
    response: Response,
    service: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_settings),
) -> RegistrationResponse:
    """
    Register an email and issue the session cookie.

    - **email**: Email address to register
    - **token**: Captcha token (required when captcha is enabled)

    Returns 201 for a new registration, 200 for an existing one.
    """
    result = await service.register(request_data.email, request_data.token)
    registration = result.registration

    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    issue_session_cookie(response, registration.id, settings)
    return RegistrationResponse.from_registration(registration)


@router.api_route(
    "/register",
    methods=["GET", "HEAD", "PUT", "PATCH", "DELETE", "OPTIONS"],
    include_in_schema=False,
)
async def register_method_unknown() -> JSONResponse:
    return error_response(
        status.HTTP_501_NOT_IMPLEMENTED,
        "method_unknown",
        "This endpoint only responds to POST",
    )
