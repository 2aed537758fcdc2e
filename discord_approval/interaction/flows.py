"""Single round-trip capabilities: approval, question, poll, diff review.

Each flow posts one message with controls, waits for the first qualifying
action or the timeout, rewrites the message to show the terminal state and
returns a result. Nothing raises past these functions: transport failures
come back as ``error`` on the result.

Callers are expected to have checked readiness and validated arguments.
"""

from __future__ import annotations

import logging

from discord_approval.interaction import render
from discord_approval.interaction.ports import ChatChannel
from discord_approval.interaction.router import InteractionRouter
from discord_approval.interaction.schemas import (
    ApprovalResult,
    DiffConfirmResult,
    PollResult,
    QuestionResult,
    ReasonedApprovalResult,
)
from discord_approval.interaction.session import InteractionSession

logger = logging.getLogger(__name__)


async def request_approval(
    channel: ChatChannel,
    router: InteractionRouter,
    message: str,
    timeout: float,
) -> ApprovalResult:
    session = InteractionSession(channel, router, timeout, kind="approval")
    approve_id = session.control_id("approve")
    deny_id = session.control_id("deny")

    try:
        await session.open(render.approval_request(message, approve_id, deny_id), {approve_id, deny_id})
        event = await session.await_action()
    except Exception as e:
        session.fail(e)
        return ApprovalResult(error=str(e))

    if event is None:
        await session.rewrite(render.timed_out(message))
        return ApprovalResult(timed_out=True)

    approved = event.custom_id == approve_id
    session.resolve()
    await session.acknowledge(event, render.approval_decided(message, approved))
    return ApprovalResult(approved=approved)


async def ask_question(
    channel: ChatChannel,
    router: InteractionRouter,
    question: str,
    options: list[str],
    timeout: float,
) -> QuestionResult:
    session = InteractionSession(channel, router, timeout, kind="question")
    select_id = session.control_id("ask_question")

    try:
        await session.open(render.question_request(question, options, select_id), {select_id})
        event = await session.await_action()
    except Exception as e:
        session.fail(e)
        return QuestionResult(error=str(e))

    if event is None:
        await session.rewrite(render.timed_out(question))
        return QuestionResult(timed_out=True)

    selected = event.values[0] if event.values else None
    session.resolve()
    await session.acknowledge(event, render.question_answered(question, selected or ""))
    return QuestionResult(selected=selected)


async def poll(
    channel: ChatChannel,
    router: InteractionRouter,
    question: str,
    options: list[str],
    min_selections: int,
    max_selections: int,
    timeout: float,
) -> PollResult:
    session = InteractionSession(channel, router, timeout, kind="poll")
    select_id = session.control_id("poll")
    request = render.poll_request(question, options, select_id, min_selections, max_selections)

    try:
        await session.open(request, {select_id})
        event = await session.await_action()
    except Exception as e:
        session.fail(e)
        return PollResult(error=str(e))

    if event is None:
        await session.rewrite(render.timed_out(question))
        return PollResult(timed_out=True)

    selected = list(event.values)
    session.resolve()
    await session.acknowledge(event, render.poll_answered(question, selected))
    return PollResult(selected=selected)


async def confirm_with_diff(
    channel: ChatChannel,
    router: InteractionRouter,
    message: str,
    diff: str,
    filename: str | None,
    timeout: float,
) -> DiffConfirmResult:
    session = InteractionSession(channel, router, timeout, kind="diff")
    approve_id = session.control_id("diff_approve")
    deny_id = session.control_id("diff_deny")
    panel = render.diff_panel(message, diff, filename)

    try:
        await session.open(render.diff_request(panel, approve_id, deny_id), {approve_id, deny_id})
        event = await session.await_action()
    except Exception as e:
        session.fail(e)
        return DiffConfirmResult(error=str(e))

    if event is None:
        await session.rewrite(render.diff_timed_out(panel))
        return DiffConfirmResult(timed_out=True)

    approved = event.custom_id == approve_id
    session.resolve()
    await session.acknowledge(event, render.diff_decided(panel, approved))
    return DiffConfirmResult(approved=approved)


async def request_approval_with_reason(
    channel: ChatChannel,
    router: InteractionRouter,
    message: str,
    timeout: float,
) -> ReasonedApprovalResult:
    """Approve/deny, then an optional reason form.

    The decision is final once a button is clicked; if the reason form is
    abandoned the result carries the decision with no reason.
    """
    session = InteractionSession(channel, router, timeout, kind="reasoned approval")
    approve_id = session.control_id("reason_approve")
    deny_id = session.control_id("reason_deny")
    form_id = session.control_id("reason_form")

    try:
        await session.open(render.approval_request(message, approve_id, deny_id), {approve_id, deny_id})
        event = await session.await_action()
    except Exception as e:
        session.fail(e)
        return ReasonedApprovalResult(error=str(e))

    if event is None:
        await session.rewrite(render.timed_out(message))
        return ReasonedApprovalResult(timed_out=True)

    approved = event.custom_id == approve_id
    session.resolve()

    reason: str | None = None
    try:
        with router.expect({form_id}) as waiter:
            await event.show_form(render.reason_form(form_id, approved))
            submission = await waiter.wait(timeout)
        if submission is not None:
            await submission.acknowledge()
            reason = submission.fields.get(render.REASON_FIELD, "").strip() or None
    except Exception:
        # decision stands without a reason
        logger.warning("Reason form failed for session %s", session.token[:8], exc_info=True)

    await session.rewrite(render.reason_decided(message, approved, reason))
    return ReasonedApprovalResult(approved=approved, reason=reason)
