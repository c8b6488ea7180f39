"""API request / response schemas for the plugin's JSON endpoints.

These thin schemas sit between HTTP and the managers.  The admin HTML page
posts a plain form instead and does not use them.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from morrisb_tracking.plugin.models.enums import ConnectionStatus, VerificationOutcome

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class SettingsUpdate(BaseModel):
    """Input for saving the workspace identifier.  Any string is accepted."""

    workspace_id: str = ""


class SettingsResponse(BaseModel):
    workspace_id: str
    status: ConnectionStatus


# ---------------------------------------------------------------------------
# Snippet
# ---------------------------------------------------------------------------


class SnippetResponse(BaseModel):
    """The snippet the plugin injects, for pasting into non-plugin sites."""

    configured: bool
    script_url: str
    html: str = Field(description="Empty when no workspace identifier is stored.")


# ---------------------------------------------------------------------------
# Installation check
# ---------------------------------------------------------------------------


class VerifyRequest(BaseModel):
    url: str


class VerifyResponse(BaseModel):
    url: str
    outcome: VerificationOutcome
    status_code: int | None = None
    attempts: int = 1
    detail: str | None = None
