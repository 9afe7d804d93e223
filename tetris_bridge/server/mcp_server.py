"""MCP server exposing the tool catalog.

:func:`build_mcp_server` registers a :class:`ToolDispatcher` on a
low-level :class:`mcp.server.Server`.  The SDK owns the protocol
(``initialize``, ``ping``, notifications, envelopes); this module only
maps the dispatcher's outcomes onto it:

- a tool result (including domain failures) becomes a ``CallToolResult``
- an argument or unknown-tool error becomes ``INVALID_PARAMS``
- anything else is logged and answered with a bare ``INTERNAL_ERROR``
"""

from __future__ import annotations

import logging

from mcp import types
from mcp.server import Server
from mcp.shared.exceptions import McpError
from starlette.concurrency import run_in_threadpool

from tetris_bridge import __version__
from tetris_bridge.errors import ToolArgumentError
from tetris_bridge.tools.dispatcher import ToolDispatcher, ToolResult

logger = logging.getLogger(__name__)

SERVER_NAME = "tetris-mcp-server"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def to_call_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def build_mcp_server(dispatcher: ToolDispatcher) -> Server:
    """Return an MCP server whose tools are ``dispatcher``'s catalog."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
            )
            for tool in dispatcher.list_tools()
        ]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        name = request.params.name
        try:
            # Remote calls block; the dispatcher's lock serializes them.
            result = await run_in_threadpool(dispatcher.call, name, request.params.arguments)
        except ToolArgumentError as exc:
            logger.info("Rejected %s: %s", name, exc)
            error = types.ErrorData(
                code=types.INVALID_PARAMS, message=str(exc), data=exc.errors or None
            )
            raise McpError(error) from exc
        except Exception as exc:
            logger.exception("MCP request error")
            raise McpError(
                types.ErrorData(code=types.INTERNAL_ERROR, message=INTERNAL_ERROR_MESSAGE)
            ) from exc
        return types.ServerResult(to_call_result(result))

    # Registered without the call_tool() decorator, which folds every
    # exception into an isError result.
    server.request_handlers[types.CallToolRequest] = call_tool
    return server
