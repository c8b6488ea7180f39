"""Shared enumerations used across the plugin."""

from __future__ import annotations

from enum import StrEnum

# -- Settings ----------------------------------------------------------------


class ConnectionStatus(StrEnum):
    """Status banner shown on the admin settings page."""

    ACTIVE = "active"
    NOT_CONNECTED = "not_connected"


# -- Installation check ------------------------------------------------------


class VerificationOutcome(StrEnum):
    INSTALLED = "installed"
    SCRIPT_MISSING = "script_missing"
    WORKSPACE_MISMATCH = "workspace_mismatch"
    UNREACHABLE = "unreachable"
