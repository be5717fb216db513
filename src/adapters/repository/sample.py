"""
Sample repository adapter - No persistence, for local demos.

Selected when neither Redis nor PostgreSQL is configured. Every lookup
"finds" a placeholder registration with a fixed ticket number and a fresh
random id, so the endpoint always answers as if the email were known.
"""

import secrets
import time

from src.domain.ports import Registration, RegistrationResult

SAMPLE_TICKET_NUMBER = 1234


class SampleRegistrationStore:
    """Implements RegistrationStore protocol without any backing store."""

    backend = "sample"

    def __init__(self, ticket_number: int = SAMPLE_TICKET_NUMBER) -> None:
        self._ticket_number = ticket_number

    def _placeholder(self, email: str) -> Registration:
        return Registration(
            id=secrets.token_urlsafe(16),
            email=email,
            ticket_number=self._ticket_number,
            created_at=int(time.time() * 1000),
        )

    def find_by_email(self, email: str) -> Registration | None:
        return self._placeholder(email)

    def create_with_sequence(self, email: str) -> RegistrationResult:
        return RegistrationResult(registration=self._placeholder(email), created=True)

    def ping(self) -> None:
        return None
