"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure, plus the value objects that cross them.
Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Registration:
    """
    A registration for the event.

    ``id``, ``email``, ``ticket_number`` and ``created_at`` never change
    once the record has been created. ``name`` and ``username`` are filled
    in by other flows and are absent for registrations created here.
    """

    id: str
    email: str
    ticket_number: int
    created_at: int  # milliseconds since epoch
    name: str | None = None
    username: str | None = None


@dataclass(frozen=True)
class RegistrationResult:
    """Outcome of a register call: the record and whether it is new."""

    registration: Registration
    created: bool


class RegistrationStore(Protocol):
    """Port interface for registration persistence."""

    backend: str

    def find_by_email(self, email: str) -> Registration | None:
        """
        Look up an existing registration.

        Args:
            email: Normalized email address

        Returns:
            The stored registration, or None if the email is unknown

        Raises:
            StoreUnavailable: If the backing store cannot be reached
        """
        ...

    def create_with_sequence(self, email: str) -> RegistrationResult:
        """
        Create a registration with the next ticket number.

        The ticket number strategy is backend specific. Stores that can
        detect a concurrent create for the same email return the
        winning record with ``created=False``.

        Args:
            email: Normalized email address

        Returns:
            RegistrationResult for the persisted registration

        Raises:
            StoreUnavailable: If the backing store cannot be reached
        """
        ...

    def ping(self) -> None:
        """
        Check connectivity to the backing store.

        Raises:
            StoreUnavailable: If the backing store cannot be reached
        """
        ...


class CaptchaVerifier(Protocol):
    """Port interface for human verification."""

    async def verify(self, token: str | None) -> bool:
        """
        Validate an opaque client token.

        Never raises: a missing token or a provider failure is False.
        """
        ...
