"""
Redis repository adapter - Implements RegistrationStore protocol.

Layout
------
- ``id:<id>`` hash per registration with fields ``email``,
  ``ticketNumber``, ``createdAt`` (and ``name``/``username`` when other
  flows fill them in). ``<id>`` is the HMAC of the normalized email.
- ``count`` global counter; ``INCR`` hands out ticket numbers.

Ticket numbers are strictly increasing and gap-free as long as INCR is
atomic on the server. Two concurrent first requests for the same email
both increment the counter; the later HSET wins and the other number is
lost. Nothing here locks against that.
"""

import logging
import time

import redis

from src.domain.exceptions import StoreUnavailable
from src.domain.identity import email_to_id
from src.domain.ports import Registration, RegistrationResult

logger = logging.getLogger(__name__)

COUNTER_KEY = "count"


def _record_key(registration_id: str) -> str:
    return f"id:{registration_id}"


class RedisRegistrationStore:
    """
    Implements RegistrationStore protocol via redis-py.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The client must be created with ``decode_responses=True``.
    """

    backend = "redis"

    def __init__(self, client: redis.Redis, id_secret: str) -> None:
        """
        Initialize store with a Redis client.

        Args:
            client: Shared redis.Redis client (decode_responses=True)
            id_secret: HMAC key used to derive ids from emails
        """
        self._client = client
        self._id_secret = id_secret

    def find_by_email(self, email: str) -> Registration | None:
        registration_id = email_to_id(email, self._id_secret)
        key = _record_key(registration_id)

        try:
            ticket_number = self._client.hget(key, "ticketNumber")
            if not ticket_number:
                return None
            name, username, created_at = self._client.hmget(key, "name", "username", "createdAt")
        except redis.RedisError as e:
            logger.error(f"Redis lookup failed: {e}")
            raise StoreUnavailable("redis lookup failed") from e

        if not created_at:
            logger.warning(f"Registration {key} has ticketNumber but no createdAt")

        return Registration(
            id=registration_id,
            email=email,
            ticket_number=int(ticket_number),
            created_at=int(created_at) if created_at else 0,
            name=name or None,
            username=username or None,
        )

    def create_with_sequence(self, email: str) -> RegistrationResult:
        registration_id = email_to_id(email, self._id_secret)
        created_at = int(time.time() * 1000)

        try:
            ticket_number = int(self._client.incr(COUNTER_KEY))
            self._client.hset(
                _record_key(registration_id),
                mapping={
                    "email": email,
                    "ticketNumber": ticket_number,
                    "createdAt": created_at,
                },
            )
        except redis.RedisError as e:
            logger.error(f"Redis create failed: {e}")
            raise StoreUnavailable("redis create failed") from e

        registration = Registration(
            id=registration_id,
            email=email,
            ticket_number=ticket_number,
            created_at=created_at,
        )
        return RegistrationResult(registration=registration, created=True)

    def ping(self) -> None:
        try:
            self._client.ping()
        except redis.RedisError as e:
            raise StoreUnavailable("redis ping failed") from e
