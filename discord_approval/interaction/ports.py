"""Narrow chat-platform interfaces the interaction core depends on.

The Discord adapter implements these; tests substitute in-memory fakes.
Nothing here knows about discord.py.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from discord_approval.interaction.schemas import FormSpec, OutboundMessage


@runtime_checkable
class PostedMessage(Protocol):
    """Handle to a message already in the channel."""

    @property
    def id(self) -> str: ...

    async def edit(self, message: OutboundMessage) -> None: ...


class ComponentEvent(Protocol):
    """A user action on a posted control (button click or select change)."""

    @property
    def custom_id(self) -> str: ...

    @property
    def values(self) -> list[str]: ...

    async def update(self, message: OutboundMessage) -> None:
        """Acknowledge the action by editing the message it came from."""
        ...

    async def show_form(self, form: FormSpec) -> None:
        """Acknowledge the action by presenting a form to the actor."""
        ...


class FormSubmission(Protocol):
    """A submitted form; ``fields`` maps field ids to the entered text."""

    @property
    def custom_id(self) -> str: ...

    @property
    def fields(self) -> dict[str, str]: ...

    async def acknowledge(self) -> None:
        """Accept the submission without posting anything visible."""
        ...


class ChatChannel(Protocol):
    """The target text channel."""

    async def send(self, message: OutboundMessage) -> PostedMessage: ...

    async def create_thread(self, name: str, initial_message: str | None = None) -> str:
        """Create a thread and return its id."""
        ...
