# dashboard/lib/cache.py
"""
Path-keyed cache for listing reads.

Entries are tagged with the page path they were read for, so a mutation
can drop everything cached for that path with one call to
`revalidate_path`. Backed by diskcache, which is thread- and process-safe;
workers sharing the directory share the cache and its invalidations.

Each path also carries a generation number that `revalidate_path` bumps.
Keys include the generation current when the read started, so a page
loaded before a revalidation is stored under a generation nobody asks for.
"""

import logging
from functools import lru_cache
from typing import Callable, Hashable, TypeVar

import diskcache

from dashboard.config import get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING = object()


class PathCache:
    def __init__(self, directory: str) -> None:
        self._cache = diskcache.Cache(directory, tag_index=True)

    def _generation(self, path: str) -> int:
        return self._cache.get(("generation", path), default=0)

    def get_or_load(self, path: str, key: Hashable, loader: Callable[[], T]) -> T:
        cache_key = (path, self._generation(path), key)
        value = self._cache.get(cache_key, default=_MISSING)
        if value is not _MISSING:
            return value

        value = loader()
        self._cache.set(cache_key, value, tag=path)
        return value

    def revalidate_path(self, path: str) -> int:
        """Mark everything read for `path` as stale. Returns the number of evicted entries."""
        # bump first: reads already in flight keep their old generation
        self._cache.incr(("generation", path), default=0)
        evicted = self._cache.evict(path)
        logger.info("Revalidated %s (%s cached entries dropped)", path, evicted)
        return evicted

    def clear(self) -> None:
        self._cache.clear()

    def close(self) -> None:
        self._cache.close()


@lru_cache
def get_cache() -> PathCache:
    return PathCache(get_settings().cache_dir)
