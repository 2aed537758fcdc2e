"""Interaction core: correlated, timeout-bounded human-in-the-loop exchanges.

Public API: the capability flows, the router and session types, and all
result/rendering schemas.
"""

from discord_approval.interaction.flows import (
    ask_question,
    confirm_with_diff,
    poll,
    request_approval,
    request_approval_with_reason,
)
from discord_approval.interaction.router import InteractionRouter, Waiter
from discord_approval.interaction.schemas import (
    ApprovalResult,
    CancelReminderResult,
    DiffConfirmResult,
    NotificationStatus,
    NotifyResult,
    OutboundMessage,
    PollResult,
    QuestionResult,
    ReasonedApprovalResult,
    ReminderResult,
    TextInputResult,
    ThreadResult,
    ToolResult,
)
from discord_approval.interaction.session import InteractionSession, SessionState
from discord_approval.interaction.text_input import TextInputSession, request_text_input

__all__ = [
    # Flows
    "ask_question",
    "confirm_with_diff",
    "poll",
    "request_approval",
    "request_approval_with_reason",
    "request_text_input",
    # Sessions
    "InteractionRouter",
    "InteractionSession",
    "SessionState",
    "TextInputSession",
    "Waiter",
    # Results
    "ApprovalResult",
    "CancelReminderResult",
    "DiffConfirmResult",
    "NotificationStatus",
    "NotifyResult",
    "OutboundMessage",
    "PollResult",
    "QuestionResult",
    "ReasonedApprovalResult",
    "ReminderResult",
    "TextInputResult",
    "ThreadResult",
    "ToolResult",
]
