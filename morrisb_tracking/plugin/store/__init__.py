"""Options store backends for the plugin's persisted settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from morrisb_tracking.plugin.store.base import OptionsStore, OptionsStoreUnavailableError
from morrisb_tracking.plugin.store.local import LocalOptionsStore
from morrisb_tracking.plugin.store.memory import InMemoryOptionsStore

if TYPE_CHECKING:
    from morrisb_tracking.plugin.settings import PluginSettings


def create_options_store(settings: PluginSettings) -> OptionsStore:
    """Create the options store backend selected by ``options_store``.

    Raises ``OptionsStoreUnavailableError`` if the selected backend has no
    connection URL configured.
    """
    if settings.options_store == "redis":
        if not settings.redis_url:
            msg = "MORRISB_REDIS_URL is not set (options_store=redis)"
            raise OptionsStoreUnavailableError(msg)
        from morrisb_tracking.plugin.store.redis import RedisOptionsStore

        return RedisOptionsStore.from_url(settings.redis_url, prefix=settings.data_prefix)

    if settings.options_store == "database":
        if not settings.database_url:
            msg = "MORRISB_DATABASE_URL is not set (options_store=database)"
            raise OptionsStoreUnavailableError(msg)
        from morrisb_tracking.plugin.store.database import DatabaseOptionsStore

        return DatabaseOptionsStore.from_url(settings.database_url)

    return LocalOptionsStore(settings.data_root, prefix=settings.data_prefix)


__all__ = [
    "InMemoryOptionsStore",
    "LocalOptionsStore",
    "OptionsStore",
    "OptionsStoreUnavailableError",
    "create_options_store",
]
