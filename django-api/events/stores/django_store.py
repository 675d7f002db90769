"""Django cache implementation of the KeyValueStore.

Entries are written without expiry, so a file-based or database cache
behaves like durable local storage.
"""

import logging

from django.core.cache import caches

from events.conf import app_settings
from events.domain.errors import StorageError
from events.stores.interfaces import KeyValueStore

logger = logging.getLogger(__name__)


class DjangoCacheStore(KeyValueStore):
    """Key-value store backed by a configured Django cache alias."""

    def __init__(self, alias: str | None = None) -> None:
        self._alias = alias or app_settings.STORAGE_CACHE

    @property
    def _cache(self):
        return caches[self._alias]

    async def get(self, key: str) -> str | None:
        try:
            value = await self._cache.aget(key)
        except Exception as exc:
            logger.warning("Failed to read key %s from cache %s: %s", key, self._alias, exc)
            raise StorageError(f"Unable to read {key}", key=key) from exc
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Unexpected value type under {key}", key=key)
        return value

    async def set(self, key: str, value: str) -> None:
        try:
            await self._cache.aset(key, value, timeout=None)
        except Exception as exc:
            logger.warning("Failed to write key %s to cache %s: %s", key, self._alias, exc)
            raise StorageError(f"Unable to write {key}", key=key) from exc

    async def remove(self, key: str) -> None:
        try:
            await self._cache.adelete(key)
        except Exception as exc:
            logger.warning("Failed to remove key %s from cache %s: %s", key, self._alias, exc)
            raise StorageError(f"Unable to remove {key}", key=key) from exc
