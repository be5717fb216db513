"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for the idempotent event
registration protocol. It defines its own port interfaces for
infrastructure abstraction, ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    ConfigurationError,
    IdentitySecretMissing,
    InvalidCaptcha,
    InvalidEmail,
    RegistrationError,
    RegistrationRejected,
    StoreUnavailable,
)
from .identity import email_to_id
from .ports import CaptchaVerifier, Registration, RegistrationResult, RegistrationStore
from .registration import RegistrationService

__all__ = [
    "CaptchaVerifier",
    "ConfigurationError",
    "IdentitySecretMissing",
    "InvalidCaptcha",
    "InvalidEmail",
    "Registration",
    "RegistrationError",
    "RegistrationRejected",
    "RegistrationResult",
    "RegistrationService",
    "RegistrationStore",
    "StoreUnavailable",
    "email_to_id",
]
