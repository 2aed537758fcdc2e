"""In-memory fakes of the chat ports, plus fixtures wiring them together.

FakeChannel records everything posted and hands out FakePostedMessage
handles; tests play the user by dispatching FakeComponentEvent /
FakeFormSubmission objects through the InteractionRouter.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from discord_approval.api.tools import ToolHandlers
from discord_approval.gate import ConnectionGate
from discord_approval.interaction.router import InteractionRouter
from discord_approval.interaction.schemas import (
    Button,
    FormSpec,
    OutboundMessage,
    SelectMenu,
)
from discord_approval.reminders import ReminderScheduler

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakePostedMessage:
    def __init__(self, message_id: str, original: OutboundMessage, fail_edit: bool = False) -> None:
        self._id = message_id
        self.original = original
        self.edits: list[OutboundMessage] = []
        self.fail_edit = fail_edit

    @property
    def id(self) -> str:
        return self._id

    async def edit(self, message: OutboundMessage) -> None:
        if self.fail_edit:
            raise RuntimeError("Unknown Message")
        self.edits.append(message)


class FakeComponentEvent:
    def __init__(self, custom_id: str, values: list[str] | None = None, fail_update: bool = False) -> None:
        self._custom_id = custom_id
        self._values = values or []
        self.updates: list[OutboundMessage] = []
        self.forms: list[FormSpec] = []
        self.fail_update = fail_update

    @property
    def custom_id(self) -> str:
        return self._custom_id

    @property
    def values(self) -> list[str]:
        return self._values

    async def update(self, message: OutboundMessage) -> None:
        if self.fail_update:
            raise RuntimeError("Interaction has already been acknowledged")
        self.updates.append(message)

    async def show_form(self, form: FormSpec) -> None:
        self.forms.append(form)


class FakeFormSubmission:
    def __init__(self, custom_id: str, fields: dict[str, str]) -> None:
        self._custom_id = custom_id
        self._fields = fields
        self.acknowledged = False

    @property
    def custom_id(self) -> str:
        return self._custom_id

    @property
    def fields(self) -> dict[str, str]:
        return self._fields

    async def acknowledge(self) -> None:
        self.acknowledged = True


class FakeChannel:
    """Records sends; ``on_send`` runs synchronously after each post."""

    def __init__(self) -> None:
        self.sent: list[OutboundMessage] = []
        self.messages: list[FakePostedMessage] = []
        self.threads: list[tuple[str, str | None]] = []
        self.fail_send: Exception | None = None
        self.fail_edit = False
        self.on_send: Callable[[OutboundMessage], None] | None = None

    async def send(self, message: OutboundMessage) -> FakePostedMessage:
        if self.fail_send is not None:
            raise self.fail_send
        posted = FakePostedMessage(f"msg-{len(self.messages) + 1}", message, fail_edit=self.fail_edit)
        self.sent.append(message)
        self.messages.append(posted)
        if self.on_send is not None:
            self.on_send(message)
        return posted

    async def create_thread(self, name: str, initial_message: str | None = None) -> str:
        self.threads.append((name, initial_message))
        return f"thread-{len(self.threads)}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def control_id(message: OutboundMessage, action: str) -> str:
    """custom_id of the control for ``action`` ("approve", "deny", "poll", ...)."""
    for control in message.controls:
        if control.custom_id.split(":", 1)[0] == action:
            return control.custom_id
    raise AssertionError(f"No {action!r} control in {[c.custom_id for c in message.controls]}")


def buttons(message: OutboundMessage) -> list[Button]:
    return [c for c in message.controls if isinstance(c, Button)]


def select_menu(message: OutboundMessage) -> SelectMenu:
    menus = [c for c in message.controls if isinstance(c, SelectMenu)]
    assert len(menus) == 1
    return menus[0]


async def wait_for_posts(channel: FakeChannel, count: int = 1) -> None:
    async def _poll() -> None:
        while len(channel.sent) < count:
            await asyncio.sleep(0)

    await asyncio.wait_for(_poll(), timeout=1.0)


async def wait_for_form(event: FakeComponentEvent) -> FormSpec:
    async def _poll() -> FormSpec:
        while not event.forms:
            await asyncio.sleep(0)
        return event.forms[-1]

    return await asyncio.wait_for(_poll(), timeout=1.0)


async def click(
    channel: FakeChannel,
    router: InteractionRouter,
    action: str,
    values: list[str] | None = None,
    index: int = 0,
    **kwargs,
) -> FakeComponentEvent:
    """Wait for message ``index`` to be posted, then act on its ``action`` control."""
    await wait_for_posts(channel, index + 1)
    event = FakeComponentEvent(control_id(channel.sent[index], action), values, **kwargs)
    assert router.dispatch(event)
    return event


def _mock_settings(**overrides) -> MagicMock:
    """MagicMock Settings to avoid pydantic validation."""
    s = MagicMock()
    s.discord_bot_token = "test-token"
    s.discord_channel_id = "123456789"
    s.connection_timeout = 0.5
    s.default_timeout = 300
    for k, v in overrides.items():
        setattr(s, k, v)
    return s


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def router() -> InteractionRouter:
    return InteractionRouter()


@pytest.fixture
def reminders():
    scheduler = ReminderScheduler()
    yield scheduler
    scheduler.clear()


@pytest.fixture
def gate(channel) -> ConnectionGate:
    g = ConnectionGate()
    g.begin()
    g.open(channel)
    return g


@pytest.fixture
def closed_gate() -> ConnectionGate:
    return ConnectionGate()


@pytest.fixture
def handlers(gate, router, reminders) -> ToolHandlers:
    return ToolHandlers(gate, router, reminders)
