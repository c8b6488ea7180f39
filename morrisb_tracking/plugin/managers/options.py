"""Workspace configuration access.

Reads and writes the workspace identifier through the injected options
store.  Values pass through untouched: saving ``" abc "`` stores
``" abc "``.
"""

from __future__ import annotations

from loguru import logger

from morrisb_tracking.plugin.models.enums import ConnectionStatus
from morrisb_tracking.plugin.models.options import WORKSPACE_ID_OPTION, WorkspaceConfig
from morrisb_tracking.plugin.store.base import OptionsStore


class InvalidWorkspaceIdError(ValueError):
    """Raised when the identifier cannot be stored as UTF-8 text (lone surrogates)."""


async def read_workspace_id(store: OptionsStore) -> str:
    """Return the stored identifier, or ``""`` if it was never saved."""
    value = await store.get(WORKSPACE_ID_OPTION)
    return value if value is not None else ""


async def load_config(store: OptionsStore) -> WorkspaceConfig:
    return WorkspaceConfig(workspace_id=await read_workspace_id(store))


async def save_settings(store: OptionsStore, workspace_id: str) -> WorkspaceConfig:
    """Persist the raw identifier, overwriting the previous value.

    An empty string clears the configuration.  Raises
    ``InvalidWorkspaceIdError`` for text that has no UTF-8 encoding.
    """
    try:
        workspace_id.encode("utf-8")
    except UnicodeEncodeError:
        msg = "Workspace ID must be valid Unicode text"
        raise InvalidWorkspaceIdError(msg) from None
    await store.set(WORKSPACE_ID_OPTION, workspace_id)
    config = WorkspaceConfig(workspace_id=workspace_id)
    logger.debug("Workspace settings saved (configured={})", config.is_configured)
    return config


async def connection_status(store: OptionsStore) -> ConnectionStatus:
    return (await load_config(store)).status
