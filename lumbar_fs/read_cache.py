"""Request-coalescing read cache with retry on handle exhaustion."""

import asyncio
import logging
import os
from collections.abc import Awaitable, Callable
from typing import Any

from lumbar_fs.cache_entry import CacheEntry
from lumbar_fs.cache_events import CACHE_RESET, CACHE_SET, CacheEvents
from lumbar_fs.path_resolver import PathResolver
from lumbar_fs.retry_on_exhaustion import DEFAULT_RETRY_DELAY, retry_on_exhaustion

logger = logging.getLogger(__name__)

Operation = Callable[[str], Awaitable[Any]]


class ReadCache:
    """Runs each read or list operation at most once per canonical path.

    Concurrent requests for a path that is still loading join the pending
    entry. Successful results stay cached until reset; permanent failures are
    evicted so the next request starts over.
    """

    def __init__(
        self,
        resolver: PathResolver,
        events: CacheEvents,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        self.resolver = resolver
        self.events = events
        self.retry_delay = retry_delay
        self.entries: dict[str, CacheEntry] = {}

    def peek(self, path: str) -> CacheEntry | None:
        """Return the live entry for ``path`` without starting a read."""
        return self.entries.get(self.resolver.resolve_path(path))

    async def get(self, path: str, operation: Operation) -> CacheEntry:
        """Return the resolved entry for ``path``, running ``operation`` if needed."""
        path = self.resolver.resolve_path(path)

        entry = self.entries.get(path)
        if entry is not None and entry.future.done():
            return entry

        if entry is None:
            loop = asyncio.get_running_loop()
            entry = CacheEntry(path=path, future=loop.create_future())
            self.entries[path] = entry
            entry.task = loop.create_task(self._execute(entry, operation))

        # Shielded so one cancelled requester cannot cancel the shared read.
        await asyncio.shield(entry.future)
        return entry

    async def _execute(self, entry: CacheEntry, operation: Operation) -> None:
        try:
            data = await retry_on_exhaustion(
                operation, entry.path, delay=self.retry_delay
            )
        except asyncio.CancelledError:
            self._evict(entry)
            entry.future.cancel()
            raise
        except Exception as e:
            self._evict(entry)
            logger.info("Read failed for %s: %s", entry.path, e)
            entry.future.set_exception(e)
        else:
            entry.data = data
            entry.future.set_result(entry)

        # Shielded waiters wake two loop turns after the future resolves
        # (inner callback, then task wakeup); notify only after they have.
        loop = asyncio.get_running_loop()
        loop.call_soon(loop.call_soon, self.events.emit, CACHE_SET, entry.path)

    def _evict(self, entry: CacheEntry) -> None:
        # A reset may already have replaced this generation.
        if self.entries.get(entry.path) is entry:
            del self.entries[entry.path]

    def reset(self, path: str | None = None) -> None:
        """Drop the entry for ``path``, or every entry when no path is given."""
        path = path and os.path.normpath(path)
        self.events.emit(CACHE_RESET, path)

        if path:
            path = self.resolver.resolve_path(path)
            self.entries.pop(path, None)
            logger.debug("Reset cache entry %s", path)
        else:
            self.entries.clear()
            logger.debug("Reset all cache entries")
