"""Reminder Scheduler: one-shot delayed notifications, cancellable until they fire.

Each reminder is an asyncio TimerHandle keyed by a UUID. When the timer
fires, delivery runs as a background task; the entry leaves the registry
once delivery finishes, whether or not it succeeded. Delivery failures are
only logged: the scheduling call returned long ago.

The registry is touched only from the event loop (schedule, cancel, fire).
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from discord_approval.interaction import render
from discord_approval.interaction.ports import ChatChannel

logger = logging.getLogger(__name__)


@dataclass
class ReminderEntry:
    reminder_id: str
    message: str
    delay_seconds: float
    handle: asyncio.TimerHandle | None = None
    fired: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class ReminderScheduler:
    def __init__(self) -> None:
        self._entries: dict[str, ReminderEntry] = {}
        self._deliveries: set[asyncio.Task] = set()

    def schedule(self, channel: ChatChannel, message: str, delay_seconds: float) -> str:
        """Arm a reminder and return its id immediately."""
        loop = asyncio.get_running_loop()
        reminder_id = str(uuid4())
        entry = ReminderEntry(reminder_id=reminder_id, message=message, delay_seconds=delay_seconds)
        entry.handle = loop.call_later(delay_seconds, self._fire, entry, channel)
        self._entries[reminder_id] = entry
        logger.info("Scheduled reminder %s in %ss", reminder_id[:8], delay_seconds)
        return reminder_id

    def cancel(self, reminder_id: str) -> bool:
        """Cancel a pending reminder. False if unknown, fired, or already cancelled."""
        entry = self._entries.get(reminder_id)
        if entry is None or entry.fired:
            return False
        if entry.handle is not None:
            entry.handle.cancel()
        del self._entries[reminder_id]
        logger.info("Cancelled reminder %s", reminder_id[:8])
        return True

    def clear(self) -> None:
        """Drop every pending reminder and stop deliveries still in flight."""
        for task in self._deliveries:
            task.cancel()
        for entry in self._entries.values():
            if entry.handle is not None:
                entry.handle.cancel()
        if self._entries:
            logger.info("Cleared %d pending reminder(s)", len(self._entries))
        self._entries.clear()

    def _fire(self, entry: ReminderEntry, channel: ChatChannel) -> None:
        entry.fired = True
        task = asyncio.ensure_future(self._deliver(entry, channel))
        self._deliveries.add(task)
        task.add_done_callback(self._deliveries.discard)

    async def _deliver(self, entry: ReminderEntry, channel: ChatChannel) -> None:
        try:
            await channel.send(render.reminder(entry.message))
            logger.info("Delivered reminder %s", entry.reminder_id[:8])
        except Exception:
            logger.exception("Failed to deliver reminder %s", entry.reminder_id[:8])
        finally:
            if self._entries.get(entry.reminder_id) is entry:
                del self._entries[entry.reminder_id]

    def __contains__(self, reminder_id: str) -> bool:
        return reminder_id in self._entries

    @property
    def pending(self) -> int:
        """Reminders that have not fired yet."""
        return sum(1 for entry in self._entries.values() if not entry.fired)
