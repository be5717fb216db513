"""
Store selection - Builds the process-wide registration store.

The first configured backend wins: Redis, then PostgreSQL. With neither
configured the sample store is used and nothing is persisted.
"""

import logging
from collections.abc import Callable

import redis
from psycopg_pool import ConnectionPool

from src.config.settings import Settings
from src.domain.exceptions import IdentitySecretMissing
from src.domain.ports import RegistrationStore

from .keyvalue import RedisRegistrationStore
from .postgres import PostgresRegistrationStore, run_migrations
from .sample import SampleRegistrationStore

logger = logging.getLogger(__name__)


def _noop() -> None:
    return None


def open_registration_store(settings: Settings) -> tuple[RegistrationStore, Callable[[], None]]:
    """
    Create the registration store selected by configuration.

    Args:
        settings: Application settings

    Returns:
        Tuple of (store, close) where close releases the store's connections

    Raises:
        IdentitySecretMissing: If Redis is configured without EMAIL_TO_ID_SECRET
    """
    if settings.redis_url:
        if not settings.email_to_id_secret:
            raise IdentitySecretMissing("EMAIL_TO_ID_SECRET is required with REDIS_URL")
        logger.info("Using Redis registration store")
        client = redis.from_url(settings.redis_url, decode_responses=True)
        return RedisRegistrationStore(client, settings.email_to_id_secret), client.close

    if settings.database_url:
        logger.info(f"Using PostgreSQL registration store (ticket_sequence={settings.ticket_sequence})")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)
        store = PostgresRegistrationStore(pool, ticket_sequence=settings.ticket_sequence)
        return store, pool.close

    logger.warning("No registration store configured, running in sample mode")
    return SampleRegistrationStore(settings.sample_ticket_number), _noop
