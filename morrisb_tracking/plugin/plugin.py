"""Host-facing plugin entry point.

A host platform constructs one ``TrackingPlugin`` with its options store and
calls it from two hook points: the admin page (render / save) and the page
render filter (``inject``).
"""

from __future__ import annotations

from morrisb_tracking.plugin import admin, snippet
from morrisb_tracking.plugin.managers import options
from morrisb_tracking.plugin.models.enums import ConnectionStatus
from morrisb_tracking.plugin.models.options import WorkspaceConfig
from morrisb_tracking.plugin.settings import PluginSettings, get_settings
from morrisb_tracking.plugin.store.base import OptionsStore


class TrackingPlugin:
    """Settings page plus snippet injection, bound to one options store."""

    def __init__(self, store: OptionsStore, settings: PluginSettings | None = None) -> None:
        self.store = store
        self.settings = settings or get_settings()

    async def render_settings_form(self, *, action_url: str = admin.SETTINGS_PATH, saved: bool = False) -> str:
        return await admin.render_settings_form(self.store, action_url=action_url, saved=saved)

    async def save_settings(self, workspace_id: str) -> WorkspaceConfig:
        return await options.save_settings(self.store, workspace_id)

    async def workspace_id(self) -> str:
        return await options.read_workspace_id(self.store)

    async def status(self) -> ConnectionStatus:
        return await options.connection_status(self.store)

    async def emit_tracking_snippet(self) -> str:
        return await snippet.emit_tracking_snippet(self.store, self.settings)

    async def inject(self, page_html: str) -> str:
        """Page render filter: return *page_html* with the snippet in ``<head>``."""
        return snippet.inject_snippet(page_html, await self.emit_tracking_snippet())
