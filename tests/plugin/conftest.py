"""Shared fixtures for plugin tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from morrisb_tracking.plugin.app import app
from morrisb_tracking.plugin.settings import PluginSettings, get_settings
from morrisb_tracking.plugin.store.local import LocalOptionsStore
from morrisb_tracking.plugin.store.memory import InMemoryOptionsStore


@pytest.fixture
def settings() -> PluginSettings:
    return PluginSettings(script_url="https://cdn.example.test/track.min.js")


@pytest.fixture
def memory_store() -> InMemoryOptionsStore:
    return InMemoryOptionsStore()


@pytest.fixture
def local_store(tmp_path: Path) -> LocalOptionsStore:
    return LocalOptionsStore(tmp_path)


@pytest.fixture
async def client(local_store: LocalOptionsStore, settings: PluginSettings) -> AsyncIterator[AsyncClient]:
    """Async HTTP client wired to the app with a temp-dir options store.

    The app lifespan does NOT run under ``ASGITransport``, so the store is
    placed on ``app.state`` directly and settings are overridden.
    """
    app.dependency_overrides[get_settings] = lambda: settings
    app.state.options_store = local_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
    app.state.options_store = None
