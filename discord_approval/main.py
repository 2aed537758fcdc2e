"""Discord approval bridge entry point.

  Settings -> logging -> Gate/Router/Reminders -> DiscordAdapter.connect()
  -> ToolHandlers -> MCP server -> stdio or streamable-HTTP transport

Missing Discord settings and a failed connection are fatal: both are
logged and the process exits with status 1. Logs go to stderr because
stdout carries the stdio transport.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import uvicorn
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from discord_approval.api.mcp import create_mcp_server
from discord_approval.api.rest import create_app
from discord_approval.api.tools import ToolHandlers
from discord_approval.config import Settings
from discord_approval.discord_adapter import DiscordAdapter
from discord_approval.gate import ConnectionFailedError, ConnectionGate
from discord_approval.interaction.router import InteractionRouter
from discord_approval.reminders import ReminderScheduler

logger = logging.getLogger(__name__)


async def serve(settings: Settings) -> None:
    """Connect to Discord, then serve MCP until the transport closes."""
    gate = ConnectionGate()
    router = InteractionRouter()
    reminders = ReminderScheduler()
    adapter = DiscordAdapter(settings, gate, router, reminders)

    await adapter.connect()
    try:
        handlers = ToolHandlers(gate, router, reminders, default_timeout=settings.default_timeout)
        server = create_mcp_server(handlers)

        if settings.transport == "http":
            app = create_app(server, gate, router, reminders)
            config = uvicorn.Config(
                app,
                host=settings.host,
                port=settings.port,
                log_level=settings.log_level.lower(),
            )
            logger.info("Serving MCP over HTTP on %s:%d", settings.host, settings.port)
            await uvicorn.Server(config).serve()
        else:
            logger.info("Serving MCP over stdio")
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await adapter.disconnect()
        logger.info("Discord approval bridge stopped")


def main() -> None:
    """Entry point: load settings, configure logging, run until stopped."""
    try:
        settings = Settings()
    except ValidationError as e:
        logging.basicConfig(level=logging.ERROR, format="%(asctime)s %(name)s %(levelname)s %(message)s")
        logger.error("DISCORD_BOT_TOKEN and DISCORD_CHANNEL_ID are required: %s", e)
        sys.exit(1)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logger.info("Channel: %s", settings.discord_channel_id)
    logger.info("Transport: %s", settings.transport)

    try:
        asyncio.run(serve(settings))
    except ConnectionFailedError as e:
        logger.error("Failed to start server: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
