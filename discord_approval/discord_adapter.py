"""Discord adapter for the interaction core.

Connects a discord.py client, resolves the target text channel and opens
the connection gate. Every incoming interaction (button click, select
change, modal submission) is wrapped and handed to the InteractionRouter,
which settles the session waiting for that custom_id.

Components are built as discord.ui views and modals purely for rendering:
they are stopped right after sending so the library's view store never
tracks them. Routing goes through on_interaction only.

Usage:
    adapter = DiscordAdapter(settings, gate, router, reminders)
    await adapter.connect()
    ...
    await adapter.disconnect()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import discord

from discord_approval.config import Settings
from discord_approval.gate import ConnectionFailedError, ConnectionGate
from discord_approval.interaction.router import InteractionRouter
from discord_approval.interaction.schemas import (
    Button,
    Embed,
    FormSpec,
    OutboundMessage,
    SelectMenu,
)
from discord_approval.reminders import ReminderScheduler

logger = logging.getLogger(__name__)

BUTTON_STYLES = {
    "primary": discord.ButtonStyle.primary,
    "secondary": discord.ButtonStyle.secondary,
    "success": discord.ButtonStyle.success,
    "danger": discord.ButtonStyle.danger,
}


# ---------------------------------------------------------------------------
# Rendering: neutral schemas -> discord.py objects
# ---------------------------------------------------------------------------


def build_embed(embed: Embed | None) -> discord.Embed | None:
    if embed is None:
        return None
    result = discord.Embed(
        title=embed.title,
        description=embed.description,
        color=embed.color,
        timestamp=embed.timestamp,
    )
    for field in embed.fields:
        result.add_field(name=field.name, value=field.value, inline=field.inline)
    if embed.footer:
        result.set_footer(text=embed.footer)
    return result


def build_view(controls: list[Button | SelectMenu]) -> discord.ui.View | None:
    """A view holding ``controls``, or None (which strips components on edit)."""
    if not controls:
        return None
    view = discord.ui.View(timeout=None)
    for control in controls:
        if isinstance(control, Button):
            view.add_item(
                discord.ui.Button(
                    custom_id=control.custom_id,
                    label=control.label,
                    style=BUTTON_STYLES[control.style],
                )
            )
        else:
            view.add_item(
                discord.ui.Select(
                    custom_id=control.custom_id,
                    placeholder=control.placeholder,
                    min_values=control.min_values,
                    max_values=control.max_values,
                    options=[
                        discord.SelectOption(label=option.label, value=option.value)
                        for option in control.options
                    ],
                )
            )
    return view


def build_modal(form: FormSpec) -> discord.ui.Modal:
    modal = discord.ui.Modal(title=form.title, custom_id=form.custom_id, timeout=None)
    modal.add_item(
        discord.ui.TextInput(
            label=form.label,
            custom_id=form.field_id,
            style=discord.TextStyle.paragraph if form.multiline else discord.TextStyle.short,
            placeholder=form.placeholder,
            required=form.required,
        )
    )
    return modal


def modal_values(data: dict[str, Any]) -> dict[str, str]:
    """Field id -> entered text from a modal_submit payload.

    Handles both action-row wrapped inputs and label-wrapped inputs.
    """
    values: dict[str, str] = {}
    for row in data.get("components", []):
        children = row.get("components")
        if children is None:
            children = [row["component"]] if "component" in row else []
        for child in children:
            if "custom_id" in child and "value" in child:
                values[child["custom_id"]] = child["value"]
    return values


# ---------------------------------------------------------------------------
# Port implementations
# ---------------------------------------------------------------------------


class DiscordPostedMessage:
    def __init__(self, message: discord.Message) -> None:
        self._message = message

    @property
    def id(self) -> str:
        return str(self._message.id)

    async def edit(self, message: OutboundMessage) -> None:
        view = build_view(message.controls)
        await self._message.edit(
            content=message.content,
            embed=build_embed(message.embed),
            view=view,
        )
        if view is not None:
            view.stop()


class DiscordComponentEvent:
    def __init__(self, interaction: discord.Interaction, custom_id: str, values: list[str]) -> None:
        self.interaction = interaction
        self._custom_id = custom_id
        self._values = values

    @property
    def custom_id(self) -> str:
        return self._custom_id

    @property
    def values(self) -> list[str]:
        return self._values

    async def update(self, message: OutboundMessage) -> None:
        view = build_view(message.controls)
        await self.interaction.response.edit_message(
            content=message.content,
            embed=build_embed(message.embed),
            view=view,
        )
        if view is not None:
            view.stop()

    async def show_form(self, form: FormSpec) -> None:
        modal = build_modal(form)
        await self.interaction.response.send_modal(modal)
        modal.stop()


class DiscordFormSubmission:
    def __init__(self, interaction: discord.Interaction, custom_id: str, fields: dict[str, str]) -> None:
        self.interaction = interaction
        self._custom_id = custom_id
        self._fields = fields

    @property
    def custom_id(self) -> str:
        return self._custom_id

    @property
    def fields(self) -> dict[str, str]:
        return self._fields

    async def acknowledge(self) -> None:
        await self.interaction.response.defer()


class DiscordChannel:
    def __init__(self, channel: discord.TextChannel) -> None:
        self._channel = channel

    @property
    def id(self) -> int:
        return self._channel.id

    async def send(self, message: OutboundMessage) -> DiscordPostedMessage:
        view = build_view(message.controls)
        kwargs: dict[str, Any] = {}
        if view is not None:
            kwargs["view"] = view
        sent = await self._channel.send(
            content=message.content,
            embed=build_embed(message.embed),
            **kwargs,
        )
        if view is not None:
            view.stop()
        return DiscordPostedMessage(sent)

    async def create_thread(self, name: str, initial_message: str | None = None) -> str:
        thread = await self._channel.create_thread(
            name=name,
            type=discord.ChannelType.public_thread,
        )
        if initial_message:
            await thread.send(initial_message)
        return str(thread.id)


def wrap_interaction(interaction: discord.Interaction) -> DiscordComponentEvent | DiscordFormSubmission | None:
    """Wrap the interactions the router understands; others return None."""
    data: dict[str, Any] = dict(interaction.data or {})
    custom_id = data.get("custom_id")
    if not custom_id:
        return None
    if interaction.type is discord.InteractionType.component:
        return DiscordComponentEvent(interaction, custom_id, list(data.get("values", [])))
    if interaction.type is discord.InteractionType.modal_submit:
        return DiscordFormSubmission(interaction, custom_id, modal_values(data))
    return None


# ---------------------------------------------------------------------------
# Client + adapter
# ---------------------------------------------------------------------------


class BridgeClient(discord.Client):
    """discord.py client that forwards interactions to the router."""

    def __init__(self, router: InteractionRouter) -> None:
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        super().__init__(intents=intents)
        self._router = router
        self.ready_event = asyncio.Event()

    async def on_ready(self) -> None:
        logger.info("Discord bot logged in as %s", self.user)
        self.ready_event.set()

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        event = wrap_interaction(interaction)
        if event is None:
            return
        if not self._router.dispatch(event):
            logger.debug("Ignored interaction %s (no session waiting)", event.custom_id)


class DiscordAdapter:
    """Owns the Discord connection lifecycle and the connection gate."""

    def __init__(
        self,
        settings: Settings,
        gate: ConnectionGate,
        router: InteractionRouter,
        reminders: ReminderScheduler,
    ) -> None:
        self._settings = settings
        self.gate = gate
        self.router = router
        self.reminders = reminders
        self._client: BridgeClient | None = None
        self._runner: asyncio.Task | None = None

    async def connect(self) -> None:
        """Log in, resolve the channel and open the gate.

        Raises ConnectionFailedError on timeout, login failure, or an
        unusable channel; the gate is left Failed.
        """
        self.gate.begin()
        client = BridgeClient(self.router)
        self._client = client
        self._runner = asyncio.create_task(
            client.start(self._settings.discord_bot_token), name="discord-client"
        )
        ready = asyncio.create_task(client.ready_event.wait(), name="discord-ready")

        done, _ = await asyncio.wait(
            {self._runner, ready},
            timeout=self._settings.connection_timeout,
            return_when=asyncio.FIRST_COMPLETED,
        )
        if ready not in done:
            ready.cancel()
            if self._runner in done and not self._runner.cancelled() and self._runner.exception():
                reason = f"Discord login failed: {self._runner.exception()}"
            else:
                reason = "Discord connection timeout"
            await self._abort(reason)

        channel = self._resolve_channel(client)
        if channel is None:
            await self._abort(
                f"Channel {self._settings.discord_channel_id} not found or is not a text channel"
            )
        self.gate.open(DiscordChannel(channel))

    def _resolve_channel(self, client: discord.Client) -> discord.TextChannel | None:
        try:
            channel_id = int(self._settings.discord_channel_id)
        except ValueError:
            return None
        channel = client.get_channel(channel_id)
        return channel if isinstance(channel, discord.TextChannel) else None

    async def _abort(self, reason: str) -> None:
        self.gate.fail(reason)
        await self._close_client()
        raise ConnectionFailedError(reason)

    async def disconnect(self) -> None:
        """Drop pending reminders, close the client and reset the gate."""
        self.reminders.clear()
        await self._close_client()
        self.gate.reset()

    async def _close_client(self) -> None:
        client, runner = self._client, self._runner
        self._client = None
        self._runner = None
        if client is not None:
            try:
                await client.close()
            except Exception:
                logger.exception("Error during Discord disconnect")
        if runner is not None:
            if not runner.done():
                runner.cancel()
            try:
                await runner
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if current is not None and current.cancelling():
                    raise
            except Exception as e:
                logger.debug("Discord client task ended with: %s", e)
