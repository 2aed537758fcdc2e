"""HTTP transport: Starlette app serving MCP over streamable HTTP.

Endpoints:
  /mcp          - MCP streamable-HTTP endpoint
  GET /health   - Connection gate state and pending work
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from mcp.server import Server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route

from discord_approval.gate import ConnectionGate
from discord_approval.interaction.router import InteractionRouter
from discord_approval.reminders import ReminderScheduler

logger = logging.getLogger(__name__)


def create_app(
    server: Server,
    gate: ConnectionGate,
    router: InteractionRouter,
    reminders: ReminderScheduler,
) -> Starlette:
    """Create the ASGI app. The MCP session manager runs inside the app lifespan."""
    session_manager = StreamableHTTPSessionManager(app=server)

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP server mounted at /mcp")
            yield

    async def health(request: Request) -> JSONResponse:
        """GET /health - Gate state, open sessions, pending reminders."""
        body = {
            "status": "healthy" if gate.ready else "unavailable",
            "gate": gate.state.value,
            "sessions": router.pending,
            "reminders": reminders.pending,
        }
        if gate.error:
            body["error"] = gate.error
        return JSONResponse(body, status_code=200 if gate.ready else 503)

    async def mcp_asgi(scope, receive, send):
        await session_manager.handle_request(scope, receive, send)

    app = Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/mcp", app=mcp_asgi),
        ],
        lifespan=lifespan,
    )
    app.state.session_manager = session_manager
    return app
