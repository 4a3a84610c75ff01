"""Live query subscriptions.

The REST transport has no push channel, so a live query is a QueryWatch
that re-runs its fetch on a fixed interval and pushes the result to its
listeners whenever it differs from the previous result. The first
successful fetch always pushes. SubscriptionHub shares one watch per query
key among any number of subscribers.
"""

from __future__ import annotations

import asyncio
import inspect
import itertools
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Awaitable[None] | None]
ErrorListener = Callable[[Exception], Awaitable[None] | None]
Fetch = Callable[[], Awaitable[Any]]


async def _call(callback: Callable[[Any], Any], value: Any) -> None:
    result = callback(value)
    if inspect.isawaitable(result):
        await result


class QueryWatch:
    """Polls one fetch and fans its changing result out to listeners."""

    def __init__(self, key: Hashable, fetch: Fetch, poll_interval: float) -> None:
        self.key = key
        self._fetch = fetch
        self._poll_interval = poll_interval
        self._listeners: dict[int, tuple[Listener, ErrorListener | None]] = {}
        self._ids = itertools.count(1)
        self._last: Any = None
        self._has_result = False
        self._task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()
        # Serializes deliveries so no listener sees an older result after a newer one.
        self._delivering = asyncio.Lock()
        self._awaiting_snapshot: set[int] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def add_listener(
        self, listener: Listener, on_error: ErrorListener | None = None
    ) -> int:
        """Register a listener and start polling if this is the first one.

        A listener joining a running watch receives the last known result
        right away instead of waiting for the next change, unless a poll
        delivers a fresher one first.
        """
        token = next(self._ids)
        self._listeners[token] = (listener, on_error)
        if self._has_result:
            self._awaiting_snapshot.add(token)
            task = asyncio.create_task(self._deliver_snapshot(token))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name=f"watch:{self.key}")
        return token

    def remove_listener(self, token: int) -> bool:
        """Detach a listener. Returns True when no listeners remain."""
        self._listeners.pop(token, None)
        self._awaiting_snapshot.discard(token)
        return not self._listeners

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
        for task in self._pending:
            task.cancel()

    async def stop(self) -> None:
        """Cancel polling and wait for the task to finish."""
        self.cancel()
        tasks = [t for t in (self._task, *self._pending) if t is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._task = None

    async def _deliver(self, listener: Listener, result: Any) -> None:
        try:
            await _call(listener, result)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("Listener of live query %s failed", self.key)

    async def _deliver_snapshot(self, token: int) -> None:
        async with self._delivering:
            if token not in self._awaiting_snapshot:
                return
            self._awaiting_snapshot.discard(token)
            entry = self._listeners.get(token)
            if entry is not None:
                await self._deliver(entry[0], self._last)

    async def _report(self, error: Exception) -> None:
        for _, on_error in list(self._listeners.values()):
            if on_error is None:
                continue
            try:
                await _call(on_error, error)
            except Exception:
                logger.exception("Error listener of live query %s failed", self.key)

    async def _poll_once(self) -> None:
        try:
            result = await self._fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Live query %s fetch failed: %s", self.key, e)
            await self._report(e)
            return
        async with self._delivering:
            if self._has_result and result == self._last:
                return
            self._last = result
            self._has_result = True
            for token, (listener, _) in list(self._listeners.items()):
                self._awaiting_snapshot.discard(token)
                await self._deliver(listener, result)

    async def _run(self) -> None:
        while True:
            await self._poll_once()
            await asyncio.sleep(self._poll_interval)


class Subscription:
    """Handle returned by subscribe(); call unsubscribe() to stop receiving pushes."""

    def __init__(self, hub: "SubscriptionHub", key: Hashable, token: int) -> None:
        self._hub = hub
        self._key = key
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        """Detach this subscriber. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._hub._release(self._key, self._token)


class SubscriptionHub:
    """Owns every QueryWatch; one watch per logical query key."""

    def __init__(self, poll_interval: float = 2.0) -> None:
        self._poll_interval = poll_interval
        self._watches: dict[Hashable, QueryWatch] = {}
        self._stopping: set[asyncio.Task] = set()
        self._closed = False

    @property
    def watch_count(self) -> int:
        return len(self._watches)

    def subscribe(
        self,
        key: Hashable,
        fetch: Fetch,
        listener: Listener,
        *,
        on_error: ErrorListener | None = None,
    ) -> Subscription:
        """Attach ``listener`` to the watch for ``key``, creating it on first use.

        Must be called from a running event loop.
        """
        if self._closed:
            raise RuntimeError("SubscriptionHub is closed")
        watch = self._watches.get(key)
        if watch is None:
            watch = QueryWatch(key, fetch, self._poll_interval)
            self._watches[key] = watch
            logger.debug("Started live query %s", key)
        token = watch.add_listener(listener, on_error)
        return Subscription(self, key, token)

    def _release(self, key: Hashable, token: int) -> None:
        watch = self._watches.get(key)
        if watch is None:
            return
        if watch.remove_listener(token):
            del self._watches[key]
            task = asyncio.ensure_future(watch.stop())
            self._stopping.add(task)
            task.add_done_callback(self._stopping.discard)
            logger.debug("Stopped live query %s (no listeners left)", key)

    async def close(self) -> None:
        """Cancel every watch. Further subscribe() calls raise."""
        self._closed = True
        watches = list(self._watches.values())
        self._watches.clear()
        await asyncio.gather(*(w.stop() for w in watches), return_exceptions=True)
        if self._stopping:
            await asyncio.gather(*self._stopping, return_exceptions=True)
        logger.info("Subscription hub closed (%s live queries stopped)", len(watches))
