"""Correlation registry that routes incoming user actions to waiting sessions.

Every session registers the control ids it posted (each embeds the
session's correlation token) and gets a Waiter backed by a single
asyncio.Future. The adapter feeds every incoming interaction through
dispatch(); the first event whose custom_id belongs to a waiter settles
that future and nothing after it can.

The race between a user action and the timeout is settled by the future
itself: asyncio.wait_for either returns its result or cancels it, and a
cancelled or finished future refuses further results.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

logger = logging.getLogger(__name__)


class Waiter:
    """Single-shot rendezvous for one stage of one session."""

    def __init__(self, router: InteractionRouter, custom_ids: frozenset[str]) -> None:
        self._router = router
        self.custom_ids = custom_ids
        self._future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

    @property
    def done(self) -> bool:
        return self._future.done()

    def offer(self, event: Any) -> bool:
        """Settle the waiter with ``event``. Returns False if already settled."""
        if self._future.done():
            return False
        self._future.set_result(event)
        return True

    async def wait(self, timeout: float) -> Any | None:
        """Wait up to ``timeout`` seconds. Returns the event, or None on timeout."""
        try:
            return await asyncio.wait_for(self._future, timeout=timeout)
        except asyncio.TimeoutError:
            # settled in the same loop iteration the deadline fired
            if self._future.done() and not self._future.cancelled():
                return self._future.result()
            return None
        finally:
            self.close()

    def close(self) -> None:
        """Stop listening. Pending futures are cancelled so late events are refused."""
        if not self._future.done():
            self._future.cancel()
        self._router._discard(self)

    def __enter__(self) -> Waiter:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class InteractionRouter:
    """Maps control custom_ids to the waiter of the session that owns them."""

    def __init__(self) -> None:
        self._waiters: dict[str, Waiter] = {}

    def expect(self, custom_ids: Iterable[str]) -> Waiter:
        """Register a waiter for ``custom_ids``. Register before posting the controls."""
        ids = frozenset(custom_ids)
        clash = ids & self._waiters.keys()
        if clash:
            raise ValueError(f"custom_id already awaited: {sorted(clash)}")
        waiter = Waiter(self, ids)
        for custom_id in ids:
            self._waiters[custom_id] = waiter
        return waiter

    def dispatch(self, event: Any) -> bool:
        """Route an incoming event. Returns True if it settled a waiter."""
        custom_id = getattr(event, "custom_id", None)
        waiter = self._waiters.get(custom_id) if custom_id else None
        if waiter is None:
            logger.debug("No session waiting for interaction %r", custom_id)
            return False
        settled = waiter.offer(event)
        if settled:
            self._discard(waiter)
        return settled

    def _discard(self, waiter: Waiter) -> None:
        for custom_id in waiter.custom_ids:
            if self._waiters.get(custom_id) is waiter:
                del self._waiters[custom_id]

    @property
    def pending(self) -> int:
        """Number of waiters still listening."""
        return len({id(w) for w in self._waiters.values()})
