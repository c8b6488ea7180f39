"""Data models for the tracking plugin."""

from morrisb_tracking.plugin.models.api import (
    SettingsResponse,
    SettingsUpdate,
    SnippetResponse,
    VerifyRequest,
    VerifyResponse,
)
from morrisb_tracking.plugin.models.enums import ConnectionStatus, VerificationOutcome
from morrisb_tracking.plugin.models.options import WORKSPACE_ID_OPTION, BootstrapPolicy, WorkspaceConfig

__all__ = [
    "WORKSPACE_ID_OPTION",
    "BootstrapPolicy",
    # Enums
    "ConnectionStatus",
    # API schemas
    "SettingsResponse",
    "SettingsUpdate",
    "SnippetResponse",
    "VerificationOutcome",
    "VerifyRequest",
    "VerifyResponse",
    "WorkspaceConfig",
]
