"""Admin settings page (HTML).

GET renders the form; POST saves it and redirects back (post/redirect/get),
so a browser refresh does not resubmit.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, status
from fastapi.responses import HTMLResponse, RedirectResponse

from morrisb_tracking.plugin.admin import SETTINGS_PATH
from morrisb_tracking.plugin.deps import Plugin
from morrisb_tracking.plugin.managers.options import InvalidWorkspaceIdError

router = APIRouter(tags=["admin"])


@router.get(SETTINGS_PATH, response_class=HTMLResponse)
async def settings_page(plugin: Plugin, updated: bool = False) -> str:
    return await plugin.render_settings_form(saved=updated)


@router.post(SETTINGS_PATH)
async def save_settings_page(plugin: Plugin, workspace_id: Annotated[str, Form()] = "") -> RedirectResponse:
    try:
        await plugin.save_settings(workspace_id)
    except InvalidWorkspaceIdError as exc:
        raise HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from None
    return RedirectResponse(f"{SETTINGS_PATH}?updated=1", status_code=status.HTTP_303_SEE_OTHER)
