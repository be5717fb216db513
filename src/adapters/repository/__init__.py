"""Repository adapters - Registration store implementations."""

from .factory import open_registration_store
from .keyvalue import RedisRegistrationStore
from .postgres import PostgresRegistrationStore, run_migrations
from .sample import SAMPLE_TICKET_NUMBER, SampleRegistrationStore

__all__ = [
    "SAMPLE_TICKET_NUMBER",
    "PostgresRegistrationStore",
    "RedisRegistrationStore",
    "SampleRegistrationStore",
    "open_registration_store",
    "run_migrations",
]
