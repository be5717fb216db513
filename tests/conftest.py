"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory stand-in for the Redis hash/counter commands the store uses
- Settings instances isolated from the process environment and .env
- Captcha verifier stubs
"""

import pytest

from src.config.settings import Settings

ID_SECRET = "test-email-secret"


class InMemoryRedis:
    """Dict-backed double for the subset of redis.Redis used by the store."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.counters: dict[str, int] = {}

    def hget(self, key: str, field: str) -> str | None:
        return self.hashes.get(key, {}).get(field)

    def hmget(self, key: str, *fields: str) -> list[str | None]:
        record = self.hashes.get(key, {})
        return [record.get(field) for field in fields]

    def incr(self, key: str) -> int:
        self.counters[key] = self.counters.get(key, 0) + 1
        return self.counters[key]

    def hset(self, key: str, mapping: dict) -> int:
        record = self.hashes.setdefault(key, {})
        added = len(set(mapping) - set(record))
        record.update({field: str(value) for field, value in mapping.items()})
        return added

    def ping(self) -> bool:
        return True


class StubCaptcha:
    """Captcha verifier returning a fixed answer and recording tokens."""

    def __init__(self, result: bool) -> None:
        self.result = result
        self.tokens: list[str | None] = []

    async def verify(self, token: str | None) -> bool:
        self.tokens.append(token)
        return self.result


@pytest.fixture
def redis_client() -> InMemoryRedis:
    """Fresh in-memory Redis double (counter starts at 0)."""
    return InMemoryRedis()


@pytest.fixture
def settings() -> Settings:
    """Default settings, ignoring .env."""
    return Settings(_env_file=None)


@pytest.fixture
def make_captcha() -> type[StubCaptcha]:
    """Factory for captcha stubs: make_captcha(True) accepts every token."""
    return StubCaptcha
