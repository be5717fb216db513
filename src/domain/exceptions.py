"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.

Client-facing rejections carry a stable ``code`` and ``message`` so the
API layer can render them without inspecting the exception type.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class RegistrationRejected(RegistrationError):
    """Request was refused before touching the store (4xx)."""

    code = "bad_request"
    message = "Invalid request"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)


class InvalidEmail(RegistrationRejected):
    """Email failed syntactic validation."""

    code = "bad_email"
    message = "Invalid email"


class InvalidCaptcha(RegistrationRejected):
    """Captcha token missing or rejected by the provider."""

    code = "bad_captcha"
    message = "Invalid captcha"


class StoreUnavailable(RegistrationError):
    """Registration store call failed (connection, timeout, driver error)."""

    pass


class ConfigurationError(RegistrationError):
    """Process configuration is incomplete or contradictory."""

    pass


class IdentitySecretMissing(ConfigurationError):
    """EMAIL_TO_ID_SECRET is required to derive registration ids."""

    pass
