"""HTTP transport for the tool catalog."""

from tetris_bridge.server.app import McpEndpoint, create_app
from tetris_bridge.server.mcp_server import build_mcp_server

__all__ = ["McpEndpoint", "build_mcp_server", "create_app"]
