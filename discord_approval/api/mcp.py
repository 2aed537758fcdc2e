"""MCP interface: human-in-the-loop tools backed by a Discord channel.

Exposes 11 tools:
  request_approval              - Approve/deny buttons, waits for a click
  request_approval_with_reason  - Approve/deny plus an optional reason form
  notify                        - Plain notification, no response
  notify_with_status            - Coloured status panel, no response
  ask_question                  - Single choice from 2-25 options
  poll                          - Multiple choice with min/max selections
  request_text_input            - Free text via a form
  confirm_with_diff             - Diff review with approve/deny buttons
  schedule_reminder             - Delayed one-shot message
  cancel_reminder               - Cancel a pending reminder
  create_thread                 - Start a thread in the channel

Each tool returns one JSON text block holding the result object. The
server is transport-agnostic: main() runs it over stdio or mounts it on
a Starlette app via StreamableHTTPSessionManager.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server import Server
from mcp.types import TextContent, Tool

from discord_approval import __version__
from discord_approval.api.tools import ToolHandlers
from discord_approval.interaction.validation import VALID_STATUSES

logger = logging.getLogger(__name__)

SERVER_NAME = "discord-approval"

_TIMEOUT = {
    "type": "number",
    "description": "Seconds to wait for a response (default: 300)",
}
_TIMEOUT_BOUNDED = {
    "type": "number",
    "description": "Seconds to wait for a response, 1-900 (default: 300)",
}
_OPTIONS = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Choices to offer (2-25)",
}


def tool_definitions() -> list[Tool]:
    return [
        Tool(
            name="request_approval",
            description=(
                "Ask the user to approve or deny something in Discord and wait for their answer. "
                "Use before any action that needs the user's confirmation."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {
                        "type": "string",
                        "description": "What needs approval, stated clearly",
                    },
                    "timeout": _TIMEOUT,
                },
                "required": ["message"],
            },
        ),
        Tool(
            name="request_approval_with_reason",
            description=(
                "Ask the user to approve or deny, then let them give an optional reason. "
                "Use when the why behind the decision matters."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "What needs approval"},
                    "timeout": _TIMEOUT_BOUNDED,
                },
                "required": ["message"],
            },
        ),
        Tool(
            name="notify",
            description="Send a notification to Discord (no response). Use for progress and completion reports.",
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "Notification text"},
                },
                "required": ["message"],
            },
        ),
        Tool(
            name="notify_with_status",
            description="Send a colour-coded status notification (success, error, warning, info).",
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "Notification text"},
                    "status": {
                        "type": "string",
                        "enum": list(VALID_STATUSES),
                        "description": "Status shown with the notification",
                    },
                    "details": {"type": "string", "description": "Optional extra details"},
                },
                "required": ["message", "status"],
            },
        ),
        Tool(
            name="ask_question",
            description=(
                "Ask the user a question with fixed choices and wait for them to pick one."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "question": {"type": "string", "description": "The question"},
                    "options": _OPTIONS,
                    "timeout": _TIMEOUT,
                },
                "required": ["question", "options"],
            },
        ),
        Tool(
            name="poll",
            description=(
                "Ask the user to pick one or more choices and wait for their selection."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "question": {"type": "string", "description": "The question"},
                    "options": _OPTIONS,
                    "min_selections": {
                        "type": "integer",
                        "description": "Minimum number of choices (default: 0)",
                    },
                    "max_selections": {
                        "type": "integer",
                        "description": "Maximum number of choices (default: number of options)",
                    },
                    "timeout": _TIMEOUT,
                },
                "required": ["question", "options"],
            },
        ),
        Tool(
            name="request_text_input",
            description="Ask the user to type free text into a form and wait for it.",
            inputSchema={
                "type": "object",
                "properties": {
                    "title": {"type": "string", "description": "Form title (max 45 characters)"},
                    "prompt": {"type": "string", "description": "What to ask the user"},
                    "placeholder": {
                        "type": "string",
                        "description": "Placeholder text (max 100 characters)",
                    },
                    "multiline": {
                        "type": "boolean",
                        "description": "Use a multi-line field (default: false)",
                    },
                    "timeout": _TIMEOUT_BOUNDED,
                },
                "required": ["title", "prompt"],
            },
        ),
        Tool(
            name="confirm_with_diff",
            description=(
                "Show a code diff and ask the user to approve or deny the change."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "Summary of the change"},
                    "diff": {"type": "string", "description": "The diff to review"},
                    "filename": {
                        "type": "string",
                        "description": "File name, used for syntax highlighting",
                    },
                    "timeout": _TIMEOUT_BOUNDED,
                },
                "required": ["message", "diff"],
            },
        ),
        Tool(
            name="schedule_reminder",
            description="Post a reminder to Discord after a delay. Returns an id for cancel_reminder.",
            inputSchema={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "Reminder text"},
                    "delay_seconds": {
                        "type": "integer",
                        "description": "Delay before posting, 1-3600 seconds",
                    },
                },
                "required": ["message", "delay_seconds"],
            },
        ),
        Tool(
            name="cancel_reminder",
            description="Cancel a reminder that has not been posted yet.",
            inputSchema={
                "type": "object",
                "properties": {
                    "reminder_id": {
                        "type": "string",
                        "description": "Id returned by schedule_reminder",
                    },
                },
                "required": ["reminder_id"],
            },
        ),
        Tool(
            name="create_thread",
            description="Create a thread in the Discord channel, optionally with a first message.",
            inputSchema={
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Thread name (max 100 characters)"},
                    "initial_message": {
                        "type": "string",
                        "description": "Optional first message in the thread",
                    },
                },
                "required": ["name"],
            },
        ),
    ]


def create_mcp_server(handlers: ToolHandlers) -> Server:
    """Create the MCP server with all tools routed to ``handlers``."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return tool_definitions()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Route tool calls to the matching handler."""
        args = arguments or {}
        try:
            route = _ROUTES.get(name)
            if route is None:
                return [TextContent(type="text", text=f"Unknown tool: {name}")]
            result = await route(handlers, args)
            return [TextContent(type="text", text=json.dumps(result.to_payload(), ensure_ascii=False))]
        except Exception as e:
            logger.error("MCP tool %s error: %s", name, e)
            return [TextContent(type="text", text=f"Error: {e}")]

    return server


async def _request_approval(h: ToolHandlers, args: dict):
    return await h.request_approval(args["message"], args.get("timeout"))


async def _request_approval_with_reason(h: ToolHandlers, args: dict):
    return await h.request_approval_with_reason(args["message"], args.get("timeout"))


async def _notify(h: ToolHandlers, args: dict):
    return await h.notify(args["message"])


async def _notify_with_status(h: ToolHandlers, args: dict):
    return await h.notify_with_status(args["message"], args["status"], args.get("details"))


async def _ask_question(h: ToolHandlers, args: dict):
    return await h.ask_question(args["question"], args.get("options", []), args.get("timeout"))


async def _poll(h: ToolHandlers, args: dict):
    return await h.poll(
        args["question"],
        args.get("options", []),
        min_selections=args.get("min_selections", 0),
        max_selections=args.get("max_selections"),
        timeout=args.get("timeout"),
    )


async def _request_text_input(h: ToolHandlers, args: dict):
    return await h.request_text_input(
        args["title"],
        args["prompt"],
        placeholder=args.get("placeholder"),
        multiline=args.get("multiline", False),
        timeout=args.get("timeout"),
    )


async def _confirm_with_diff(h: ToolHandlers, args: dict):
    return await h.confirm_with_diff(
        args["message"],
        args["diff"],
        filename=args.get("filename"),
        timeout=args.get("timeout"),
    )


async def _schedule_reminder(h: ToolHandlers, args: dict):
    return await h.schedule_reminder(args["message"], args["delay_seconds"])


async def _cancel_reminder(h: ToolHandlers, args: dict):
    return await h.cancel_reminder(args["reminder_id"])


async def _create_thread(h: ToolHandlers, args: dict):
    return await h.create_thread(args["name"], args.get("initial_message"))


_ROUTES = {
    "request_approval": _request_approval,
    "request_approval_with_reason": _request_approval_with_reason,
    "notify": _notify,
    "notify_with_status": _notify_with_status,
    "ask_question": _ask_question,
    "poll": _poll,
    "request_text_input": _request_text_input,
    "confirm_with_diff": _confirm_with_diff,
    "schedule_reminder": _schedule_reminder,
    "cancel_reminder": _cancel_reminder,
    "create_thread": _create_thread,
}
