"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request

from src.config.settings import Settings, get_settings
from src.domain.ports import CaptchaVerifier, RegistrationStore
from src.domain.registration import RegistrationService


def get_store(request: Request) -> RegistrationStore:
    """
    Get registration store from app state.

    The store is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.store


def get_captcha(request: Request) -> CaptchaVerifier | None:
    """Get captcha verifier from app state (None when enforcement is off)."""
    return getattr(request.app.state, "captcha", None)


def get_registration_service(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the store and captcha verifier for the domain service.
    """
    return RegistrationService(
        store=get_store(request),
        captcha=get_captcha(request),
        captcha_enabled=settings.captcha_enabled,
    )
