"""Shared test fixtures: settings isolation plus testcontainers for Redis and PostgreSQL.

Store integration tests use real Redis and PostgreSQL containers managed by
testcontainers-python.  Containers are session-scoped (started once per test
run).  Each Redis test gets a flushed database; PostgreSQL tests get a
migrated schema and use unique option keys.

Requires Docker.  Tests needing containers are marked with
``@pytest.mark.integration``.
"""

from __future__ import annotations

import os
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from morrisb_tracking.plugin.settings import _get_settings_cached


def _set_env(key: str, value: str) -> None:
    """Set an env var and invalidate the settings cache."""
    os.environ[key] = value
    _get_settings_cached.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Point the local store at a temp dir and drop cached settings around each test."""
    monkeypatch.setenv("MORRISB_DATA_ROOT", str(tmp_path / "data"))
    monkeypatch.delenv("MORRISB_OPTIONS_STORE", raising=False)
    monkeypatch.delenv("MORRISB_SCRIPT_URL", raising=False)
    _get_settings_cached.cache_clear()
    yield
    _get_settings_cached.cache_clear()


# ---------------------------------------------------------------------------
# Session-scoped: containers (started once, shared across all tests)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_container():
    """Start a PostgreSQL 17 container for the test session."""
    from testcontainers.postgres import PostgresContainer

    with PostgresContainer(
        image="postgres:17",
        username="test",
        password="test",
        dbname="morrisb_test",
        driver="psycopg",
    ) as pg:
        yield pg


@pytest.fixture(scope="session")
def redis_container():
    """Start a Redis 7 container for the test session."""
    from testcontainers.redis import RedisContainer

    with RedisContainer(image="redis:7") as r:
        yield r


# ---------------------------------------------------------------------------
# Session-scoped: connection URLs and schema migration
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def pg_url(pg_container) -> str:
    """PostgreSQL URL (psycopg3 dialect) with Alembic migrations applied."""
    url = pg_container.get_connection_url()
    _set_env("MORRISB_DATABASE_URL", url)

    from alembic import command
    from alembic.config import Config

    ini_path = Path(__file__).parent.parent / "morrisb_tracking" / "plugin" / "alembic.ini"
    command.upgrade(Config(str(ini_path)), "head")

    return url


@pytest.fixture(scope="session")
def redis_url(redis_container) -> str:
    host = redis_container.get_container_host_ip()
    port = redis_container.get_exposed_port(6379)
    return f"redis://{host}:{port}/0"


# ---------------------------------------------------------------------------
# Function-scoped: async engine, Redis client with flush
# ---------------------------------------------------------------------------


@pytest.fixture
async def async_engine(pg_url: str) -> AsyncIterator[AsyncEngine]:
    """Per-test async engine (pooled connections are bound to the test's event loop)."""
    engine = create_async_engine(pg_url)
    yield engine
    await engine.dispose()


@pytest.fixture
async def redis_client(redis_url: str) -> AsyncIterator[aioredis.Redis]:
    """Async Redis client; database flushed after each test."""
    client = aioredis.from_url(redis_url)
    yield client
    await client.flushdb()
    await client.aclose()
