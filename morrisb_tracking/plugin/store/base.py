"""Options store interface.

The host platform owns a flat key-value settings store; the plugin only
reads and writes through it and never assumes a storage engine.  Values are
stored verbatim -- no trimming, no normalization.

The interface is async so that filesystem, Redis and PostgreSQL backends
share one calling convention.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class OptionsStoreUnavailableError(RuntimeError):
    """Raised when a backend is selected but its connection URL is missing."""


@runtime_checkable
class OptionsStore(Protocol):
    """Async protocol for a host settings store."""

    async def get(self, key: str) -> str | None:
        """Return the stored value, or ``None`` if the option was never set."""
        ...

    async def set(self, key: str, value: str) -> None:
        """Store *value* under *key*, overwriting any previous value."""
        ...

    async def aclose(self) -> None:
        """Release connections held by the backend.  No-op if none."""
        ...
