"""Snippet and installation-check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from morrisb_tracking.plugin.deps import Plugin
from morrisb_tracking.plugin.models.api import SnippetResponse, VerifyRequest, VerifyResponse
from morrisb_tracking.plugin.verify import NotConfiguredError, verify_installation

router = APIRouter(tags=["snippet"])


@router.get("/snippet", response_model=SnippetResponse)
async def get_snippet(plugin: Plugin) -> SnippetResponse:
    """Return the snippet the plugin injects, for pasting into other sites."""
    html = await plugin.emit_tracking_snippet()
    return SnippetResponse(configured=bool(html), script_url=plugin.settings.script_url, html=html)


@router.post("/verify", response_model=VerifyResponse)
async def verify(body: VerifyRequest, plugin: Plugin) -> VerifyResponse:
    """Fetch a live page and check that the snippet is installed on it."""
    try:
        return await verify_installation(body.url, await plugin.workspace_id(), plugin.settings)
    except NotConfiguredError as exc:
        raise HTTPException(status.HTTP_409_CONFLICT, detail=str(exc)) from None
