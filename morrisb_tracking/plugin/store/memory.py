"""In-process options store.

Used when the plugin is embedded as a library with no persistent backend,
and by the test suite.
"""

from __future__ import annotations


class InMemoryOptionsStore:
    """Dict-backed implementation of the OptionsStore protocol."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._options: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._options.get(key)

    async def set(self, key: str, value: str) -> None:
        self._options[key] = value

    async def aclose(self) -> None:
        return None
