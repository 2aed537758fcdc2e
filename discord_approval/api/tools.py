"""Tool handlers: the capability boundary behind every MCP tool.

Order of checks for every capability:
  1. connection gate (not ready -> "Discord not connected", no channel I/O)
  2. argument validation (descriptive error, no channel I/O)
  3. the interactive exchange itself

Every handler returns a result model; none raises.
"""

from __future__ import annotations

import logging

from discord_approval.gate import NOT_CONNECTED, ConnectionGate
from discord_approval.interaction import flows, render, validation
from discord_approval.interaction.router import InteractionRouter
from discord_approval.interaction.schemas import (
    ApprovalResult,
    CancelReminderResult,
    DiffConfirmResult,
    NotifyResult,
    PollResult,
    QuestionResult,
    ReasonedApprovalResult,
    ReminderResult,
    TextInputResult,
    ThreadResult,
)
from discord_approval.interaction.text_input import request_text_input
from discord_approval.reminders import ReminderScheduler

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300


class ToolHandlers:
    """Business logic for each tool, independent of the MCP transport.

    The gate, router and reminder registry are injected so tests can run
    against fakes without any process-wide state.
    """

    def __init__(
        self,
        gate: ConnectionGate,
        router: InteractionRouter,
        reminders: ReminderScheduler,
        default_timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.gate = gate
        self.router = router
        self.reminders = reminders
        self.default_timeout = default_timeout

    def _timeout(self, timeout: float | None) -> float:
        return self.default_timeout if timeout is None else timeout

    async def request_approval(self, message: str, timeout: float | None = None) -> ApprovalResult:
        channel = self.gate.channel
        if channel is None:
            return ApprovalResult(error=NOT_CONNECTED)
        return await flows.request_approval(
            channel, self.router, message, self._timeout(timeout)
        )

    async def notify(self, message: str) -> NotifyResult:
        channel = self.gate.channel
        if channel is None:
            return NotifyResult(error=NOT_CONNECTED)
        try:
            await channel.send(render.notification(message))
        except Exception as e:
            logger.error("notify failed: %s", e)
            return NotifyResult(error=str(e))
        return NotifyResult(success=True)

    async def notify_with_status(
        self,
        message: str,
        status: str,
        details: str | None = None,
    ) -> NotifyResult:
        channel = self.gate.channel
        if channel is None:
            return NotifyResult(error=NOT_CONNECTED)
        error = validation.validate_status(status)
        if error:
            return NotifyResult(error=error)
        try:
            await channel.send(render.status_notification(message, status, details))
        except Exception as e:
            logger.error("notify_with_status failed: %s", e)
            return NotifyResult(error=str(e))
        return NotifyResult(success=True)

    async def ask_question(
        self,
        question: str,
        options: list[str],
        timeout: float | None = None,
    ) -> QuestionResult:
        channel = self.gate.channel
        if channel is None:
            return QuestionResult(error=NOT_CONNECTED)
        error = validation.validate_options(options)
        if error:
            return QuestionResult(error=error)
        return await flows.ask_question(
            channel, self.router, question, list(options), self._timeout(timeout)
        )

    async def poll(
        self,
        question: str,
        options: list[str],
        min_selections: int = 0,
        max_selections: int | None = None,
        timeout: float | None = None,
    ) -> PollResult:
        channel = self.gate.channel
        if channel is None:
            return PollResult(error=NOT_CONNECTED)
        error = validation.validate_poll(options, min_selections, max_selections)
        if error:
            return PollResult(error=error)
        return await flows.poll(
            channel,
            self.router,
            question,
            list(options),
            min_selections,
            validation.effective_max_selections(len(options), max_selections),
            self._timeout(timeout),
        )

    async def request_text_input(
        self,
        title: str,
        prompt: str,
        placeholder: str | None = None,
        multiline: bool = False,
        timeout: float | None = None,
    ) -> TextInputResult:
        channel = self.gate.channel
        if channel is None:
            return TextInputResult(error=NOT_CONNECTED)
        timeout = self._timeout(timeout)
        error = validation.validate_text_input(title, prompt, placeholder, timeout)
        if error:
            return TextInputResult(error=error)
        return await request_text_input(
            channel, self.router, title, prompt, placeholder, multiline, timeout
        )

    async def confirm_with_diff(
        self,
        message: str,
        diff: str,
        filename: str | None = None,
        timeout: float | None = None,
    ) -> DiffConfirmResult:
        channel = self.gate.channel
        if channel is None:
            return DiffConfirmResult(error=NOT_CONNECTED)
        timeout = self._timeout(timeout)
        error = validation.validate_diff_confirm(message, diff, timeout)
        if error:
            return DiffConfirmResult(error=error)
        return await flows.confirm_with_diff(channel, self.router, message, diff, filename, timeout)

    async def request_approval_with_reason(
        self,
        message: str,
        timeout: float | None = None,
    ) -> ReasonedApprovalResult:
        channel = self.gate.channel
        if channel is None:
            return ReasonedApprovalResult(error=NOT_CONNECTED)
        timeout = self._timeout(timeout)
        error = validation.validate_reason_approval(message, timeout)
        if error:
            return ReasonedApprovalResult(error=error)
        return await flows.request_approval_with_reason(channel, self.router, message, timeout)

    async def schedule_reminder(self, message: str, delay_seconds: float) -> ReminderResult:
        channel = self.gate.channel
        if channel is None:
            return ReminderResult(error=NOT_CONNECTED)
        error = validation.validate_reminder_delay(delay_seconds)
        if error:
            return ReminderResult(error=error)
        try:
            reminder_id = self.reminders.schedule(channel, message, delay_seconds)
        except Exception as e:
            logger.error("schedule_reminder failed: %s", e)
            return ReminderResult(error=str(e))
        return ReminderResult(reminder_id=reminder_id, success=True)

    async def cancel_reminder(self, reminder_id: str) -> CancelReminderResult:
        if not self.gate.ready:
            return CancelReminderResult(error=NOT_CONNECTED)
        if not self.reminders.cancel(reminder_id):
            return CancelReminderResult(error="Reminder not found")
        return CancelReminderResult(success=True)

    async def create_thread(self, name: str, initial_message: str | None = None) -> ThreadResult:
        channel = self.gate.channel
        if channel is None:
            return ThreadResult(error=NOT_CONNECTED)
        error = validation.validate_thread_name(name)
        if error:
            return ThreadResult(error=error)
        try:
            thread_id = await channel.create_thread(name.strip(), initial_message or None)
        except Exception as e:
            logger.error("create_thread failed: %s", e)
            return ThreadResult(error=str(e))
        return ThreadResult(thread_id=thread_id, success=True)
