"""
PostgreSQL repository adapter - Implements RegistrationStore protocol.

This module provides the PostgreSQL implementation of the domain's
store port using psycopg3 with raw SQL.

Ticket Number Strategies
------------------------
``count`` (default):
    ``SELECT COUNT(*)`` then insert with ``count + 1``. The two statements
    are not atomic: concurrent creates for *different* emails can read the
    same count and receive the same ticket number. There is no constraint
    on ticket_number, so this is a silent duplicate, not an error.

``sequence``:
    ``nextval('registration_ticket_seq')`` inside the INSERT. Numbers are
    unique and increasing; a lost same-email race burns one value, so gaps
    are possible.

Same-email races are settled by the UNIQUE constraint on ``email``:
the INSERT uses ``ON CONFLICT (email) DO NOTHING`` and the loser reads
back the winning row.
"""

import logging
from datetime import datetime
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreUnavailable
from src.domain.ports import Registration, RegistrationResult

logger = logging.getLogger(__name__)

TICKET_SEQUENCES = ("count", "sequence")

_COLUMNS = "id, email, ticket_number, created_at, name, username"

# src/adapters/repository/postgres.py -> <repo root>/migrations
MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def _to_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def _row_to_registration(row: tuple) -> Registration:
    return Registration(
        id=str(row[0]),
        email=row[1],
        ticket_number=int(row[2]),
        created_at=_to_millis(row[3]),
        name=row[4],
        username=row[5],
    )


class PostgresRegistrationStore:
    """
    Implements RegistrationStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    backend = "postgres"

    def __init__(self, pool: ConnectionPool, ticket_sequence: str = "count") -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            ticket_sequence: "count" or "sequence" (see module docstring)
        """
        if ticket_sequence not in TICKET_SEQUENCES:
            raise ValueError(f"Unknown ticket sequence strategy: {ticket_sequence}")
        self._pool = pool
        self._ticket_sequence = ticket_sequence

    def find_by_email(self, email: str) -> Registration | None:
        sql = f"SELECT {_COLUMNS} FROM registrations WHERE email = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (email,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error(f"Registration lookup failed: {e}")
            raise StoreUnavailable("postgres lookup failed") from e

        return _row_to_registration(row) if row is not None else None

    def create_with_sequence(self, email: str) -> RegistrationResult:
        """
        Insert a registration with the next ticket number.

        Returns the existing row with ``created=False`` when a concurrent
        request inserted the same email first.
        """
        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                if self._ticket_sequence == "sequence":
                    cursor.execute(
                        f"""
                        INSERT INTO registrations (email, ticket_number)
                        VALUES (%s, nextval('registration_ticket_seq'))
                        ON CONFLICT (email) DO NOTHING
                        RETURNING {_COLUMNS}
                        """,
                        (email,),
                    )
                else:
                    cursor.execute("SELECT COUNT(*) FROM registrations")
                    total = cursor.fetchone()[0]
                    cursor.execute(
                        f"""
                        INSERT INTO registrations (email, ticket_number)
                        VALUES (%s, %s)
                        ON CONFLICT (email) DO NOTHING
                        RETURNING {_COLUMNS}
                        """,
                        (email, total + 1),
                    )
                row = cursor.fetchone()
                conn.commit()

                if row is not None:
                    return RegistrationResult(registration=_row_to_registration(row), created=True)

                # Lost the same-email race: return the row that won
                cursor.execute(f"SELECT {_COLUMNS} FROM registrations WHERE email = %s", (email,))
                existing = cursor.fetchone()
        except psycopg.Error as e:
            logger.error(f"Registration create failed: {e}")
            raise StoreUnavailable("postgres create failed") from e

        if existing is None:
            raise StoreUnavailable(f"Registration for {email} conflicted but could not be read")
        logger.info(f"Concurrent registration resolved by unique constraint: {email}")
        return RegistrationResult(registration=_row_to_registration(existing), created=False)

    def ping(self) -> None:
        try:
            with self._pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            raise StoreUnavailable("postgres ping failed") from e


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> None:
    """
    Apply the schema files under ``migrations/`` in filename order.

    All files share one connection; each runs in its own transaction so a
    failing file leaves the earlier ones applied. Files must be safe to
    re-run on every startup.

    Raises:
        RuntimeError: If any file fails to apply
    """
    if not migrations_dir.is_dir():
        logger.warning(f"No migrations directory at {migrations_dir}, schema left as is")
        return

    scripts = sorted(migrations_dir.glob("*.sql"))
    if not scripts:
        logger.info(f"Migrations directory {migrations_dir} is empty")
        return

    with pool.connection() as conn:
        for script in scripts:
            try:
                with conn.transaction():
                    conn.execute(script.read_text())
            except (psycopg.Error, OSError) as e:
                logger.error(f"Schema file {script.name} could not be applied: {e}")
                raise RuntimeError(f"Schema migration {script.name} failed") from e
            logger.debug(f"Applied schema file {script.name}")

    logger.info(f"Schema up to date ({len(scripts)} file(s) applied)")
