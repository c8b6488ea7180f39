"""Local filesystem options store.

All options live in one JSON object under the data root, with an optional
namespace prefix::

    {data_root}/{prefix}/options.json

When prefix is None, the path collapses to::

    {data_root}/options.json

File I/O runs in the thread pool via ``anyio.to_thread.run_sync``.  Writes
are atomic (temp file in the same directory + rename), and an in-process lock
serialises the read-modify-write of ``set`` so two saves cannot drop each
other's keys.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from functools import partial
from pathlib import Path

import anyio
from anyio import to_thread


class LocalOptionsStore:
    """Local filesystem implementation of the OptionsStore protocol."""

    def __init__(self, data_root: str | Path, prefix: str | None = None) -> None:
        base = Path(data_root)
        if prefix:
            base = base / prefix
        self._path = base / "options.json"
        self._lock = anyio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        options = await to_thread.run_sync(partial(_load_options, self._path))
        return options.get(key)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            options = await to_thread.run_sync(partial(_load_options, self._path))
            options[key] = value
            data = json.dumps(options, indent=2, ensure_ascii=False)
            await to_thread.run_sync(partial(_atomic_write, self._path, data))

    async def aclose(self) -> None:
        return None


# -- Sync helpers (run in thread pool) -----------------------------------------


def _load_options(path: Path) -> dict[str, str]:
    """Read the options file.  A missing file means no options were saved yet."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    data = json.loads(raw)
    if not isinstance(data, dict):
        msg = f"Options file {path} does not contain a JSON object"
        raise ValueError(msg)
    return data


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically so readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise
