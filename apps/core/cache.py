"""
Read-through TTL cache on top of Django's cache framework.

Used for per-organization configuration that is read on every write
(content-type definitions) but changes rarely. Entries live in a Django
cache backend (the database cache in deployment) so an invalidation in one
worker is seen by every other worker. The clock and loader are constructor
arguments so tests control time deterministically.

Usage::

    cache = TTLCache(loader=load_config, ttl_seconds=60, prefix="org_config")
    value, expires_at = cache.get(organization_id)
    cache.invalidate(organization_id)
"""

import time
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

from django.core.cache import cache as default_cache
from django.core.cache.backends.base import BaseCache

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """
    Read-through cache keyed by ``K`` with a fixed time-to-live.

    Entries are stored as ``(value, expires_at)`` and loaded with
    ``loader(key)`` on a miss or once ``clock()`` reaches ``expires_at``.
    The backend timeout is the TTL as well, so stale rows get evicted.
    Loader exceptions propagate and nothing is cached for that key.

    ``invalidate()`` without a key bumps a generation counter that is part
    of every entry key, which drops all entries at once.
    """

    def __init__(
        self,
        loader: Callable[[K], V],
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
        backend: BaseCache | None = None,
        prefix: str = "ttl_cache",
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._backend = backend if backend is not None else default_cache
        self._prefix = prefix

    @property
    def _generation_key(self) -> str:
        return f"{self._prefix}:generation"

    def _generation(self) -> int:
        generation = self._backend.get(self._generation_key)
        if generation is None:
            self._backend.add(self._generation_key, 1, timeout=None)
            generation = self._backend.get(self._generation_key, 1)
        return generation

    def _entry_key(self, key: K) -> str:
        return f"{self._prefix}:{self._generation()}:{key}"

    def _fresh_entry(self, key: K) -> tuple[V, float] | None:
        entry = self._backend.get(self._entry_key(key))
        if entry is not None and self._clock() < entry[1]:
            return entry
        return None

    def get(self, key: K) -> tuple[V, float]:
        """Return ``(value, expires_at)``, loading the value when stale."""
        entry = self._fresh_entry(key)
        if entry is not None:
            return entry

        value = self._loader(key)
        entry = (value, self._clock() + self._ttl)
        self._backend.set(self._entry_key(key), entry, timeout=self._ttl)
        return entry

    def invalidate(self, key: K | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is None."""
        if key is not None:
            self._backend.delete(self._entry_key(key))
            return

        self._generation()
        try:
            self._backend.incr(self._generation_key)
        except ValueError:
            # Generation evicted between the read and the increment
            self._backend.set(self._generation_key, 1, timeout=None)

    def __contains__(self, key: object) -> bool:
        return self._fresh_entry(key) is not None  # type: ignore[arg-type]
