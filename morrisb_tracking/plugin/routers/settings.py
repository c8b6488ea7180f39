"""Workspace settings endpoints (RPC-style).

All write operations use POST; reads use GET.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from morrisb_tracking.plugin.deps import Plugin
from morrisb_tracking.plugin.managers.options import InvalidWorkspaceIdError
from morrisb_tracking.plugin.models.api import SettingsResponse, SettingsUpdate

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/get", response_model=SettingsResponse)
async def get_workspace_settings(plugin: Plugin) -> SettingsResponse:
    """Return the stored workspace identifier and connection status."""
    workspace_id = await plugin.workspace_id()
    return SettingsResponse(workspace_id=workspace_id, status=await plugin.status())


@router.post("/update", response_model=SettingsResponse)
async def update_workspace_settings(body: SettingsUpdate, plugin: Plugin) -> SettingsResponse:
    """Overwrite the workspace identifier.  An empty string disconnects the site."""
    try:
        config = await plugin.save_settings(body.workspace_id)
    except InvalidWorkspaceIdError as exc:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from None
    return SettingsResponse(workspace_id=config.workspace_id, status=config.status)
