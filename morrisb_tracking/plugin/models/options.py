"""Plugin option models.

``WorkspaceConfig`` is the one persisted entity: a workspace identifier that
may be empty.  ``BootstrapPolicy`` shapes the client-side wait for the
tracking script's init function; it is built from deployment settings and
never persisted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from morrisb_tracking.plugin.models.enums import ConnectionStatus

if TYPE_CHECKING:
    from morrisb_tracking.plugin.settings import PluginSettings

WORKSPACE_ID_OPTION = "morrisb_workspace_id"
"""Options-store key holding the workspace identifier."""


class WorkspaceConfig(BaseModel):
    """Stored plugin configuration.  An empty identifier means unconfigured."""

    workspace_id: str = ""

    @property
    def is_configured(self) -> bool:
        return self.workspace_id != ""

    @property
    def status(self) -> ConnectionStatus:
        return ConnectionStatus.ACTIVE if self.is_configured else ConnectionStatus.NOT_CONNECTED


class BootstrapPolicy(BaseModel):
    """Bounded, backing-off poll schedule for the inline bootstrap."""

    interval_ms: int = Field(default=100, gt=0)
    backoff: float = Field(default=1.5, ge=1.0)
    max_interval_ms: int = Field(default=2000, gt=0)
    max_attempts: int = Field(default=50, gt=0)

    @classmethod
    def from_settings(cls, settings: PluginSettings) -> BootstrapPolicy:
        return cls(
            interval_ms=settings.poll_interval_ms,
            backoff=settings.poll_backoff,
            max_interval_ms=settings.poll_max_interval_ms,
            max_attempts=settings.poll_max_attempts,
        )

    def delays(self) -> list[int]:
        """Timer delays (ms) the bootstrap schedules, each capped at ``max_interval_ms``."""
        result: list[int] = []
        delay = float(self.interval_ms)
        for _ in range(self.max_attempts):
            result.append(round(min(delay, self.max_interval_ms)))
            delay = min(delay * self.backoff, self.max_interval_ms)
        return result
