"""FastAPI dependency injection for the options store and plugin.

Usage in route handlers::

    @router.get("/settings/get")
    async def get_settings(plugin: Plugin) -> SettingsResponse:
        ...

Dependencies raise HTTP 503 if the options store could not be created at
startup (e.g. MORRISB_REDIS_URL unset while options_store=redis).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from morrisb_tracking.plugin.plugin import TrackingPlugin
from morrisb_tracking.plugin.settings import PluginSettings, get_settings
from morrisb_tracking.plugin.store.base import OptionsStore


def get_options_store(request: Request) -> OptionsStore:
    store: OptionsStore | None = getattr(request.app.state, "options_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Options store not configured.",
        )
    return store


def get_plugin(
    store: Annotated[OptionsStore, Depends(get_options_store)],
    settings: Annotated[PluginSettings, Depends(get_settings)],
) -> TrackingPlugin:
    return TrackingPlugin(store, settings)


# -- Annotated type aliases for concise route signatures ---------------------

Plugin = Annotated[TrackingPlugin, Depends(get_plugin)]
"""Annotated dependency: a TrackingPlugin bound to the shared store."""
