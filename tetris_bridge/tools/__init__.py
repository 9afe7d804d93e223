"""Tool dispatch: the bridge's externally invocable operations.

Typical usage::

    from tetris_bridge.tools import build_dispatcher

    dispatcher = build_dispatcher(bridge)
    result = dispatcher.call("moveToPage", {"pageNumber": "3"})
"""

from tetris_bridge.tools.arguments import (
    DrawPixelArguments,
    MoveToPageArguments,
    NoArguments,
    SetColorArguments,
    ToolArguments,
)
from tetris_bridge.tools.catalog import FIRST_PAGE_MESSAGE, build_dispatcher
from tetris_bridge.tools.dispatcher import Tool, ToolDispatcher, ToolResult

__all__ = [
    "FIRST_PAGE_MESSAGE",
    "DrawPixelArguments",
    "MoveToPageArguments",
    "NoArguments",
    "SetColorArguments",
    "Tool",
    "ToolArguments",
    "ToolDispatcher",
    "ToolResult",
    "build_dispatcher",
]
