"""Argument checks run before any interactive exchange starts.

Every validator is pure: it returns an error message, or None when the
arguments are acceptable. Callers check channel readiness first, then
validate, then touch the channel.
"""

from __future__ import annotations

from collections.abc import Sequence

from discord_approval.interaction.schemas import NotificationStatus

MIN_OPTIONS = 2
MAX_OPTIONS = 25
MIN_REMINDER_DELAY = 1
MAX_REMINDER_DELAY = 3600
MIN_TIMEOUT = 1
MAX_TIMEOUT = 900
MAX_TITLE_LENGTH = 45
MAX_PLACEHOLDER_LENGTH = 100
MAX_THREAD_NAME_LENGTH = 100

VALID_STATUSES: tuple[NotificationStatus, ...] = ("success", "error", "warning", "info")


def is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def validate_options(options: Sequence[str]) -> str | None:
    if not isinstance(options, (list, tuple)):
        return "options must be a list of strings"
    if len(options) < MIN_OPTIONS:
        return f"At least {MIN_OPTIONS} options are required"
    if len(options) > MAX_OPTIONS:
        return f"No more than {MAX_OPTIONS} options are allowed"
    return None


def effective_max_selections(option_count: int, max_selections: int | None) -> int:
    """Unspecified max means every option may be picked."""
    return option_count if max_selections is None else max_selections


def validate_poll(
    options: Sequence[str],
    min_selections: int,
    max_selections: int | None,
) -> str | None:
    error = validate_options(options)
    if error:
        return error

    count = len(options)
    max_effective = effective_max_selections(count, max_selections)

    if min_selections < 0:
        return "min_selections must be 0 or greater"
    if min_selections > count:
        return "min_selections must not exceed the number of options"
    if max_effective < 1:
        return "max_selections must be 1 or greater"
    if max_effective > count:
        return "max_selections must not exceed the number of options"
    if min_selections > max_effective:
        return "min_selections must not exceed max_selections"
    return None


def validate_timeout(timeout: float) -> str | None:
    if timeout < MIN_TIMEOUT or timeout > MAX_TIMEOUT:
        return f"timeout must be between {MIN_TIMEOUT} and {MAX_TIMEOUT} seconds"
    return None


def validate_reminder_delay(delay_seconds: float) -> str | None:
    if delay_seconds < MIN_REMINDER_DELAY or delay_seconds > MAX_REMINDER_DELAY:
        return f"delay_seconds must be between {MIN_REMINDER_DELAY} and {MAX_REMINDER_DELAY}"
    return None


def validate_text_input(
    title: str,
    prompt: str,
    placeholder: str | None,
    timeout: float,
) -> str | None:
    if is_blank(title):
        return "title is required"
    if len(title) > MAX_TITLE_LENGTH:
        return f"title must be {MAX_TITLE_LENGTH} characters or fewer"
    if is_blank(prompt):
        return "prompt is required"
    if placeholder and len(placeholder) > MAX_PLACEHOLDER_LENGTH:
        return f"placeholder must be {MAX_PLACEHOLDER_LENGTH} characters or fewer"
    return validate_timeout(timeout)


def validate_diff_confirm(message: str, diff: str, timeout: float) -> str | None:
    if is_blank(message):
        return "message is required"
    if is_blank(diff):
        return "diff is required"
    return validate_timeout(timeout)


def validate_reason_approval(message: str, timeout: float) -> str | None:
    if is_blank(message):
        return "message is required"
    return validate_timeout(timeout)


def validate_status(status: str) -> str | None:
    if status not in VALID_STATUSES:
        return f"Invalid status. Valid values: {', '.join(VALID_STATUSES)}"
    return None


def validate_thread_name(name: str) -> str | None:
    if is_blank(name):
        return "name is required"
    if len(name) > MAX_THREAD_NAME_LENGTH:
        return f"name must be {MAX_THREAD_NAME_LENGTH} characters or fewer"
    return None
