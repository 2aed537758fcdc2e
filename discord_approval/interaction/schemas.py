"""Pydantic DTOs for capability results and neutral message rendering.

Result models are the public contract of every tool: they serialise with
camelCase aliases (timedOut, reminderId, threadId) and drop ``error`` when
it is unset.

The outbound types (OutboundMessage, Button, SelectMenu, Embed, FormSpec)
describe what to post without depending on any chat SDK; the Discord
adapter turns them into real components.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NotificationStatus = Literal["success", "error", "warning", "info"]
ButtonStyle = Literal["primary", "secondary", "success", "danger"]


class ToolResult(BaseModel):
    """Base for every capability result."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ApprovalResult(ToolResult):
    approved: bool = False
    timed_out: bool = False


class ReasonedApprovalResult(ToolResult):
    approved: bool = False
    reason: str | None = None
    timed_out: bool = False

    def to_payload(self) -> dict[str, Any]:
        # reason is part of the shape even when nobody gave one
        payload = super().to_payload()
        payload.setdefault("reason", None)
        return payload


class NotifyResult(ToolResult):
    success: bool = False


class QuestionResult(ToolResult):
    selected: str | None = None
    timed_out: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.setdefault("selected", None)
        return payload


class PollResult(ToolResult):
    selected: list[str] = Field(default_factory=list)
    timed_out: bool = False


class TextInputResult(ToolResult):
    text: str | None = None
    timed_out: bool = False
    cancelled: bool = False

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload.setdefault("text", None)
        return payload


class DiffConfirmResult(ApprovalResult):
    pass


class ReminderResult(ToolResult):
    reminder_id: str = ""
    success: bool = False


class CancelReminderResult(ToolResult):
    success: bool = False


class ThreadResult(ToolResult):
    thread_id: str = ""
    success: bool = False


# --- Outbound rendering ---


class Button(BaseModel):
    custom_id: str
    label: str
    style: ButtonStyle = "secondary"


class SelectOption(BaseModel):
    label: str
    value: str


class SelectMenu(BaseModel):
    custom_id: str
    placeholder: str
    options: list[SelectOption]
    min_values: int = 1
    max_values: int = 1


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class Embed(BaseModel):
    """A rich panel: coloured, titled, with optional fields and footer."""

    title: str
    description: str | None = None
    color: int | None = None
    fields: list[EmbedField] = Field(default_factory=list)
    footer: str | None = None
    timestamp: datetime | None = None


class OutboundMessage(BaseModel):
    """A message to post or an edit to apply.

    ``controls`` empty means "remove every interactive component".
    """

    content: str | None = None
    embed: Embed | None = None
    controls: list[Button | SelectMenu] = Field(default_factory=list)


class FormSpec(BaseModel):
    """A single-field form (modal) shown in response to a button click."""

    custom_id: str
    title: str
    field_id: str
    label: str
    placeholder: str | None = None
    multiline: bool = False
    required: bool = True
