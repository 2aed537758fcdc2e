"""Interaction Session: one outstanding human-facing exchange.

A session owns a correlation token, mints the control ids it posts,
registers its waiter before posting (so an early click cannot be lost),
and records exactly one terminal state. Edits made after the outcome is
decided are best-effort: failures are logged and never replace the
decided result.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from typing import Any
from uuid import uuid4

from discord_approval.interaction.ports import ChatChannel, ComponentEvent, PostedMessage
from discord_approval.interaction.router import InteractionRouter, Waiter
from discord_approval.interaction.schemas import OutboundMessage

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"
    FAILED = "failed"


class InteractionSession:
    """Drives post -> wait -> reconcile for one capability invocation."""

    def __init__(
        self,
        channel: ChatChannel,
        router: InteractionRouter,
        timeout: float,
        kind: str = "interaction",
    ) -> None:
        self.channel = channel
        self.router = router
        self.timeout = timeout
        self.kind = kind
        self.token = uuid4().hex
        self.message: PostedMessage | None = None
        self.state = SessionState.PENDING
        self._waiter: Waiter | None = None

    def control_id(self, action: str) -> str:
        """Control id for ``action``, unique to this session."""
        return f"{action}:{self.token}"

    async def open(self, message: OutboundMessage, accept: Iterable[str]) -> None:
        """Start listening for ``accept`` ids, then post ``message``."""
        self._waiter = self.router.expect(accept)
        try:
            self.message = await self.channel.send(message)
        except BaseException:
            self._waiter.close()
            self._waiter = None
            raise
        logger.debug("%s session %s posted message %s", self.kind, self.token[:8], self.message.id)

    async def await_action(self) -> Any | None:
        """Wait for the first qualifying action. None means the window elapsed."""
        if self._waiter is None:
            raise RuntimeError("Session has not been opened")
        event = await self._waiter.wait(self.timeout)
        self._waiter = None
        if event is None:
            self.state = SessionState.TIMED_OUT
            logger.info("%s session %s timed out after %ss", self.kind, self.token[:8], self.timeout)
        return event

    async def expect_next(self, accept: Iterable[str]) -> Any | None:
        """Register and await a follow-up stage with a fresh timeout window."""
        self._waiter = self.router.expect(accept)
        return await self.await_action()

    def resolve(self, state: SessionState = SessionState.RESOLVED) -> None:
        self.state = state

    def fail(self, exc: BaseException) -> None:
        self.state = SessionState.FAILED
        logger.error("%s session %s failed: %s", self.kind, self.token[:8], exc)
        if self._waiter is not None:
            self._waiter.close()
            self._waiter = None

    async def acknowledge(self, event: ComponentEvent, message: OutboundMessage) -> None:
        """Best-effort: answer the action by rewriting the message it came from."""
        try:
            await event.update(message)
        except Exception:
            logger.warning(
                "Failed to update %s message after response (session %s)",
                self.kind,
                self.token[:8],
                exc_info=True,
            )

    async def rewrite(self, message: OutboundMessage) -> None:
        """Best-effort: edit the posted message directly."""
        if self.message is None:
            return
        try:
            await self.message.edit(message)
        except Exception:
            logger.warning(
                "Failed to edit %s message %s (session %s)",
                self.kind,
                self.message.id,
                self.token[:8],
                exc_info=True,
            )
