"""View Cache — in-process cache of list views, invalidated after committed writes.

Invariants:
    - Entries are keyed by (ViewKey, params); invalidate(key) drops every params entry
    - Each invalidate bumps the key's generation: a load that started before the
      invalidation returns its result but does not cache it (read-after-write)
    - Cached values are tuples: callers cannot mutate a shared entry

Design Decisions:
    - One instance per application on app.state, injected with Depends: no
      module-level state, tests get a fresh cache per client
    - Single-process scope: a multi-worker deployment keeps one cache per worker
"""

import logging
from collections.abc import Awaitable, Callable, Hashable, Iterable
from typing import TypeVar

from dashboard.core.domain_types import ViewKey

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ViewCache:
    """Stale-on-write cache for listing views."""

    def __init__(self):
        self._entries: dict[ViewKey, dict[Hashable, tuple]] = {}
        self._generations: dict[ViewKey, int] = {}

    async def get_or_load(
        self,
        key: ViewKey,
        params: Hashable,
        loader: Callable[[], Awaitable[Iterable[T]]],
    ) -> tuple[T, ...]:
        """Return the cached view or await loader() and cache its result."""
        bucket = self._entries.get(key, {})
        if params in bucket:
            return bucket[params]
        generation = self._generations.get(key, 0)
        value = tuple(await loader())
        if self._generations.get(key, 0) == generation:
            self._entries.setdefault(key, {})[params] = value
        return value

    def invalidate(self, *keys: ViewKey) -> None:
        """Mark views stale so the next read recomputes from the store."""
        for key in keys:
            self._entries.pop(key, None)
            self._generations[key] = self._generations.get(key, 0) + 1
            logger.debug(
                f"View invalidated: {key.value}", extra={"view_key": key.value},
            )

    def is_cached(self, key: ViewKey, params: Hashable) -> bool:
        return params in self._entries.get(key, {})

    def generation(self, key: ViewKey) -> int:
        return self._generations.get(key, 0)
