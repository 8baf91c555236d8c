"""Short-lived cache around any RemoteHeadReader."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from contribution_target.domain.entities import Repository
from contribution_target.domain.ports.remote_head_reader import RemoteHeadReader

logger = logging.getLogger(__name__)

_Key = tuple[str, str]


class CachingRemoteHeadReader:
    """RemoteHeadReader that remembers answers for ``ttl_seconds``.

    Entries are keyed by ``(repository path, remote name)``. Concurrent
    lookups for the same key share a single call to the wrapped reader, which
    runs in its own task: a cancelled caller stops waiting without cancelling
    the lookup for the others. Exceptions are never cached.
    ``ttl_seconds <= 0`` disables caching but still shares in-flight lookups.
    """

    def __init__(
        self,
        inner: RemoteHeadReader,
        ttl_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._inner = inner
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[_Key, tuple[float, str | None]] = {}
        self._in_flight: dict[_Key, asyncio.Task[str | None]] = {}

    async def get_remote_head(self, repository: Repository, remote_name: str) -> str | None:
        key = (repository.path, remote_name)

        cached = self._entries.get(key)
        if cached is not None:
            expires_at, value = cached
            if self._clock() < expires_at:
                return value
            del self._entries[key]

        task = self._in_flight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._lookup(key, repository, remote_name))
            task.add_done_callback(_retrieve_exception)
            self._in_flight[key] = task
        return await asyncio.shield(task)

    async def _lookup(self, key: _Key, repository: Repository, remote_name: str) -> str | None:
        try:
            value = await self._inner.get_remote_head(repository, remote_name)
        finally:
            del self._in_flight[key]
        if self._ttl > 0:
            self._entries[key] = (self._clock() + self._ttl, value)
        return value


def _retrieve_exception(task: asyncio.Task[str | None]) -> None:
    # every waiter may have been cancelled; keep asyncio from warning about it
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Remote HEAD lookup failed: %s", task.exception())
