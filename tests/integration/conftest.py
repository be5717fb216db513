"""
Shared fixtures for PostgreSQL integration tests.

Requires PostgreSQL reachable at DATABASE_URL (e.g. via docker-compose);
the whole directory is skipped otherwise.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests."""
    settings = get_settings()
    if not settings.database_url:
        pytest.skip("DATABASE_URL not set")

    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=10, open=False)
    try:
        pool.open(wait=True, timeout=5)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL not reachable")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty registrations and restart the ticket sequence."""
    with pool.connection() as conn:
        conn.execute("TRUNCATE registrations")
        conn.execute("ALTER SEQUENCE registration_ticket_seq RESTART WITH 1")
        conn.commit()
    yield
