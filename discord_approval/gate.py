"""Connection Gate: process-wide readiness of the chat connection.

    Disconnected -> Connecting -> Ready
                    Connecting -> Failed

Ready requires both a logged-in client and a resolved text channel.
Capabilities read ``ready`` synchronously before doing anything; only the
adapter's connect()/disconnect() move the state.
"""

from __future__ import annotations

import enum
import logging

from discord_approval.interaction.ports import ChatChannel

logger = logging.getLogger(__name__)

NOT_CONNECTED = "Discord not connected"


class GateState(str, enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    READY = "ready"
    FAILED = "failed"


class ConnectionFailedError(RuntimeError):
    """Connecting timed out, was rejected, or the target channel is unusable."""


class ConnectionGate:
    """Owns the readiness flag and the target channel reference."""

    def __init__(self) -> None:
        self.state = GateState.DISCONNECTED
        self.error: str | None = None
        self._channel: ChatChannel | None = None

    @property
    def ready(self) -> bool:
        return self.state is GateState.READY and self._channel is not None

    @property
    def channel(self) -> ChatChannel | None:
        """The target channel, or None unless the gate is ready."""
        return self._channel if self.ready else None

    def begin(self) -> None:
        self.state = GateState.CONNECTING
        self.error = None
        self._channel = None

    def open(self, channel: ChatChannel) -> None:
        if self.state is not GateState.CONNECTING:
            raise RuntimeError(f"Cannot open gate from state {self.state.value}")
        self._channel = channel
        self.state = GateState.READY
        logger.info("Connection gate open")

    def fail(self, reason: str) -> None:
        self.state = GateState.FAILED
        self.error = reason
        self._channel = None
        logger.error("Connection failed: %s", reason)

    def reset(self) -> None:
        self.state = GateState.DISCONNECTED
        self.error = None
        self._channel = None
