"""HTTP transport: the MCP server on a single ``/mcp`` endpoint.

``POST`` is handed to a stateless, JSON-response
:class:`StreamableHTTPSessionManager`.  ``GET`` and ``DELETE`` are
answered with a fixed "method not allowed" envelope.  A body that is
not JSON, or any failure escaping the session manager, is logged and
answered with a fixed "internal error" envelope that carries no detail.
"""

from __future__ import annotations

import contextlib
import json
import logging
from typing import Any, AsyncIterator

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.requests import Request
from starlette.types import Message, Receive, Scope, Send

from tetris_bridge import __version__
from tetris_bridge.server.mcp_server import INTERNAL_ERROR_MESSAGE, build_mcp_server
from tetris_bridge.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

INTERNAL_ERROR = -32603
METHOD_NOT_ALLOWED = -32000


def _envelope_error(code: int, message: str) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "error": {"code": code, "message": message},
        "id": None,
    }


def _method_not_allowed() -> JSONResponse:
    return JSONResponse(_envelope_error(METHOD_NOT_ALLOWED, "Method not allowed."), status_code=405)


def _internal_error() -> JSONResponse:
    return JSONResponse(_envelope_error(INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE), status_code=500)


class McpEndpoint:
    """ASGI app for ``POST /mcp``.

    The body is read once to reject non-JSON input, then replayed to the
    session manager.
    """

    def __init__(self, session_manager: StreamableHTTPSessionManager) -> None:
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        body = await Request(scope, receive).body()
        try:
            json.loads(body)
        except ValueError:
            logger.exception("MCP request error")
            await _internal_error()(scope, receive, send)
            return

        async def replay() -> Message:
            return {"type": "http.request", "body": body, "more_body": False}

        try:
            await self.session_manager.handle_request(scope, replay, send)
        except Exception:
            logger.exception("MCP request error")
            await _internal_error()(scope, receive, send)


def create_app(dispatcher: ToolDispatcher) -> FastAPI:
    """Build the FastAPI application serving ``dispatcher`` on ``/mcp``.

    The session manager's task group lives for the app's lifespan, so
    clients (including ``TestClient``) must run the lifespan.
    """
    session_manager = StreamableHTTPSessionManager(
        app=build_mcp_server(dispatcher),
        json_response=True,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("MCP session manager started")
            yield
        logger.info("MCP session manager stopped")

    app = FastAPI(title="Tetris MCP Server", version=__version__, lifespan=lifespan)

    @app.get("/mcp")
    def get_mcp() -> JSONResponse:
        logger.info("Received GET MCP request")
        return _method_not_allowed()

    @app.delete("/mcp")
    def delete_mcp() -> JSONResponse:
        logger.info("Received DELETE MCP request")
        return _method_not_allowed()

    app.add_route("/mcp", McpEndpoint(session_manager), methods=["POST"])
    return app
