"""
Registration domain service - Idempotent ticket assignment.

This module contains the core business logic for event registration.

Registration Protocol
=====================

For a given email address the service either returns the existing
registration unchanged or creates a new one with the next ticket number:

    validate email -> [verify captcha] -> find_by_email
        found     -> existing record, created=False
        not found -> create_with_sequence, created=True

Rejections (bad email, bad captcha) happen before the store is touched,
so a refused request never has side effects.

Concurrency Notes
-----------------
The lookup and the create are separate store calls. Two requests for the
same email can both miss the lookup; only the store can settle that race
(the relational store does it with a UNIQUE constraint). Ticket number
atomicity is likewise a property of the selected store strategy.
"""

import logging
from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from .exceptions import InvalidCaptcha, InvalidEmail
from .ports import CaptchaVerifier, RegistrationResult, RegistrationStore

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for event registration.

    Orchestrates the registration flow: email normalization and
    validation, captcha enforcement, lookup and ticket assignment.
    """

    store: RegistrationStore
    captcha: CaptchaVerifier | None = None
    captcha_enabled: bool = False

    async def register(self, email: str | None, token: str | None = None) -> RegistrationResult:
        """
        Register an email for the event, idempotently.

        Args:
            email: User's email address (will be normalized)
            token: Opaque captcha token, only checked when enforcement is on

        Returns:
            RegistrationResult with the stored record and whether it is new

        Raises:
            InvalidEmail: If the email is not syntactically valid
            InvalidCaptcha: If captcha enforcement is on and the token fails
            StoreUnavailable: If the store cannot be reached
        """
        normalized_email = self._normalize_email(email)
        self._validate_email(normalized_email)

        if self.captcha_enabled:
            await self._check_captcha(token)

        existing = self.store.find_by_email(normalized_email)
        if existing is not None:
            logger.info(
                "Existing registration: %s ticket=%d backend=%s",
                normalized_email,
                existing.ticket_number,
                self.store.backend,
            )
            return RegistrationResult(registration=existing, created=False)

        result = self.store.create_with_sequence(normalized_email)
        logger.info(
            "%s registration: %s ticket=%d backend=%s",
            "New" if result.created else "Concurrent",
            normalized_email,
            result.registration.ticket_number,
            self.store.backend,
        )
        return result

    async def _check_captcha(self, token: str | None) -> None:
        if self.captcha is None or not await self.captcha.verify(token):
            raise InvalidCaptcha()

    def _normalize_email(self, email: str | None) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return (email or "").strip().lower()

    def _validate_email(self, email: str) -> None:
        """
        Reject syntactically invalid addresses.

        Deliverability (DNS) is not checked; a domain without a dot,
        such as ``a@b``, is rejected.
        """
        if not email:
            raise InvalidEmail()
        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise InvalidEmail(str(e)) from None
