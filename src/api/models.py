"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Response fields use the camelCase names clients already consume.
"""

from pydantic import BaseModel, ConfigDict, Field

from src.domain.ports import Registration


class RegisterRequest(BaseModel):
    """Request model for event registration."""

    # Syntax is checked by the domain so a bad address yields bad_email, not 422
    email: str | None = Field(None, description="Email address to register")
    token: str | None = Field(None, description="Captcha response token")


class RegistrationResponse(BaseModel):
    """Response model for a new or existing registration."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    ticket_number: int = Field(..., alias="ticketNumber")
    created_at: int = Field(..., alias="createdAt", description="Milliseconds since epoch")
    name: str | None = None
    username: str | None = None

    @classmethod
    def from_registration(cls, registration: Registration) -> "RegistrationResponse":
        return cls(
            id=registration.id,
            email=registration.email,
            ticket_number=registration.ticket_number,
            created_at=registration.created_at,
            name=registration.name,
            username=registration.username,
        )


class ErrorDetail(BaseModel):
    """Machine-readable error code with a human message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: ErrorDetail


class HealthResponse(BaseModel):
    status: str
    backend: str
