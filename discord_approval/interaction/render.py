"""Message rendering for every interaction kind.

Builds neutral OutboundMessage values: the text, panels and controls a
session posts, and the terminal-state edits it applies afterwards.
"""

from __future__ import annotations

from datetime import UTC, datetime

from discord_approval.interaction.schemas import (
    Button,
    Embed,
    EmbedField,
    FormSpec,
    NotificationStatus,
    OutboundMessage,
    SelectMenu,
    SelectOption,
)

# Platform limit for select option labels and values
OPTION_LIMIT = 100
# Platform limits for form titles, field labels and placeholders
FORM_TITLE_LIMIT = 45
FORM_LABEL_LIMIT = 45
PLACEHOLDER_LIMIT = 100

MAX_DIFF_LENGTH = 1500
TEXT_PREVIEW_LENGTH = 500

TEXT_INPUT_FIELD = "text_input_value"
REASON_FIELD = "reason_value"

BLURPLE = 0x5865F2
GREEN = 0x57F287
RED = 0xED4245
YELLOW = 0xFEE75C
GREY = 0x99AAB5

STATUS_STYLES: dict[NotificationStatus, tuple[int, str, str]] = {
    "success": (GREEN, "✅", "Success"),
    "error": (RED, "❌", "Error"),
    "warning": (YELLOW, "⚠️", "Warning"),
    "info": (BLURPLE, "ℹ️", "Info"),
}

LANGUAGE_BY_EXTENSION = {
    "ts": "typescript",
    "tsx": "tsx",
    "js": "javascript",
    "jsx": "jsx",
    "py": "python",
    "rb": "ruby",
    "go": "go",
    "rs": "rust",
    "java": "java",
    "kt": "kotlin",
    "swift": "swift",
    "cs": "csharp",
    "cpp": "cpp",
    "c": "c",
    "h": "c",
    "md": "markdown",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "toml": "toml",
    "sql": "sql",
    "sh": "bash",
    "bash": "bash",
    "zsh": "bash",
}


def language_for(filename: str | None) -> str:
    """Syntax-highlighting hint from a file extension, ``diff`` otherwise."""
    if not filename or "." not in filename:
        return "diff"
    ext = filename.rsplit(".", 1)[1].lower()
    return LANGUAGE_BY_EXTENSION.get(ext, "diff")


def _select_options(options: list[str]) -> list[SelectOption]:
    return [
        SelectOption(label=option[:OPTION_LIMIT], value=option[:OPTION_LIMIT])
        for option in options
    ]


def _struck(text: str) -> str:
    return f"~~{text}~~"


def timed_out(text: str) -> OutboundMessage:
    return OutboundMessage(content=f"⏰ **Timed out**\n\n{_struck(text)}")


# --- Approval ---


def approval_request(message: str, approve_id: str, deny_id: str) -> OutboundMessage:
    return OutboundMessage(
        content=f"\U0001f514 **Approval requested**\n\n{message}",
        controls=[
            Button(custom_id=approve_id, label="✅ Approve", style="success"),
            Button(custom_id=deny_id, label="❌ Deny", style="danger"),
        ],
    )


def approval_decided(message: str, approved: bool) -> OutboundMessage:
    marker = "✅ **Approved**" if approved else "❌ **Denied**"
    return OutboundMessage(content=f"{marker}\n\n{_struck(message)}")


def reason_form(form_id: str, approved: bool) -> FormSpec:
    title = "Reason for approval" if approved else "Reason for denial"
    return FormSpec(
        custom_id=form_id,
        title=title,
        field_id=REASON_FIELD,
        label="Reason (optional)",
        placeholder="Leave blank to skip",
        multiline=True,
        required=False,
    )


def reason_decided(message: str, approved: bool, reason: str | None) -> OutboundMessage:
    decided = approval_decided(message, approved)
    if reason:
        decided.content = f"{decided.content}\n\n**Reason:** {reason}"
    return decided


# --- Questions and polls ---


def question_request(question: str, options: list[str], select_id: str) -> OutboundMessage:
    return OutboundMessage(
        content=f"❓ **Question**\n\n{question}",
        controls=[
            SelectMenu(
                custom_id=select_id,
                placeholder="Choose an option...",
                options=_select_options(options),
            )
        ],
    )


def question_answered(question: str, selected: str) -> OutboundMessage:
    return OutboundMessage(content=f"✅ **Answered**\n\n{question}\n\n**Selected:** {selected}")


def poll_request(
    question: str,
    options: list[str],
    select_id: str,
    min_selections: int,
    max_selections: int,
) -> OutboundMessage:
    if min_selections > 0:
        placeholder = f"Choose {min_selections} to {max_selections}..."
        hint = f"_Choose {min_selections} to {max_selections}_"
    else:
        placeholder = f"Choose up to {max_selections}..."
        hint = f"_Choose up to {max_selections}_"
    return OutboundMessage(
        content=f"\U0001f4ca **Poll**\n\n{question}\n\n{hint}",
        controls=[
            SelectMenu(
                custom_id=select_id,
                placeholder=placeholder,
                options=_select_options(options),
                min_values=min_selections,
                max_values=max_selections,
            )
        ],
    )


def poll_answered(question: str, selected: list[str]) -> OutboundMessage:
    lines = "\n".join(f"・{s}" for s in selected) or "(none)"
    return OutboundMessage(
        content=f"✅ **Answered**\n\n{question}\n\n**Selected ({len(selected)}):**\n{lines}"
    )


# --- Text input ---


def text_input_request(prompt: str, enter_id: str, cancel_id: str) -> OutboundMessage:
    return OutboundMessage(
        content=f"\U0001f4dd **Text input requested**\n\n{prompt}",
        controls=[
            Button(custom_id=enter_id, label="\U0001f4dd Enter text", style="primary"),
            Button(custom_id=cancel_id, label="Cancel", style="secondary"),
        ],
    )


def text_input_form(
    form_id: str,
    title: str,
    prompt: str,
    placeholder: str | None,
    multiline: bool,
) -> FormSpec:
    return FormSpec(
        custom_id=form_id,
        title=title[:FORM_TITLE_LIMIT],
        field_id=TEXT_INPUT_FIELD,
        label=prompt[:FORM_LABEL_LIMIT],
        placeholder=placeholder[:PLACEHOLDER_LIMIT] if placeholder else None,
        multiline=multiline,
    )


def text_input_cancelled(prompt: str) -> OutboundMessage:
    return OutboundMessage(content=f"❌ **Cancelled**\n\n{_struck(prompt)}")


def text_input_received(prompt: str, text: str) -> OutboundMessage:
    preview = text[:TEXT_PREVIEW_LENGTH]
    if len(text) > TEXT_PREVIEW_LENGTH:
        preview += "..."
    return OutboundMessage(
        content=f"✅ **Input received**\n\n{prompt}\n\n**Entered:**\n```\n{preview}\n```"
    )


# --- Diff review ---


def diff_panel(message: str, diff: str, filename: str | None) -> Embed:
    truncated = len(diff) > MAX_DIFF_LENGTH
    shown = diff[:MAX_DIFF_LENGTH] + "\n... (truncated)" if truncated else diff

    # Field values cap at 1024 characters, so the diff goes in the description
    embed = Embed(
        title="\U0001f4dd Review code change",
        description=f"{message}\n\n```{language_for(filename)}\n{shown}\n```",
        color=BLURPLE,
        timestamp=datetime.now(UTC),
    )
    if filename:
        embed.fields.append(EmbedField(name="File", value=f"`{filename}`", inline=True))
    if truncated:
        embed.footer = f"Diff truncated, full length {len(diff)} characters"
    return embed


def diff_request(panel: Embed, approve_id: str, deny_id: str) -> OutboundMessage:
    return OutboundMessage(
        embed=panel,
        controls=[
            Button(custom_id=approve_id, label="✅ Approve", style="success"),
            Button(custom_id=deny_id, label="❌ Deny", style="danger"),
        ],
    )


def diff_decided(panel: Embed, approved: bool) -> OutboundMessage:
    if approved:
        update = {"title": "✅ Approved", "color": GREEN}
    else:
        update = {"title": "❌ Denied", "color": RED}
    return OutboundMessage(embed=panel.model_copy(update=update))


def diff_timed_out(panel: Embed) -> OutboundMessage:
    return OutboundMessage(embed=panel.model_copy(update={"title": "⏰ Timed out", "color": GREY}))


# --- Notifications ---


def notification(message: str) -> OutboundMessage:
    return OutboundMessage(content=f"\U0001f4e2 {message}")


def status_notification(
    message: str,
    status: NotificationStatus,
    details: str | None = None,
) -> OutboundMessage:
    color, emoji, title = STATUS_STYLES[status]
    embed = Embed(
        title=f"{emoji} {title}",
        description=message,
        color=color,
        timestamp=datetime.now(UTC),
    )
    if details:
        embed.fields.append(EmbedField(name="Details", value=details))
    return OutboundMessage(embed=embed)


def reminder(message: str) -> OutboundMessage:
    return OutboundMessage(content=f"\U0001f514 **Reminder**\n\n{message}")
