"""The bridge's tool catalog.

:func:`build_dispatcher` registers every tool the bridge offers on a
fresh :class:`ToolDispatcher`.  Handlers run with the session lock held
and may raise :class:`~tetris_bridge.errors.BridgeDomainError` to report
a failure to the client.
"""

from __future__ import annotations

import logging

from tetris_bridge.board.codec import format_board
from tetris_bridge.errors import CellLookupError
from tetris_bridge.session import fumen_js
from tetris_bridge.session.bridge import BridgeSession
from tetris_bridge.tools.arguments import (
    DrawPixelArguments,
    MoveToPageArguments,
    NoArguments,
    SetColorArguments,
)
from tetris_bridge.tools.dispatcher import ToolDispatcher, ToolResult

logger = logging.getLogger(__name__)

FIRST_PAGE_MESSAGE = "Already at the first page."

_BOARD_DESCRIPTION = (
    "Get the current board as 20 rows of 10 cells, top row first. "
    "'_' is an empty cell, 'X' is a garbage block, and any other letter "
    "(I, L, O, Z, T, J, S) is what remains of that tetromino; e.g. Z is "
    "part of a Z piece. Example: [_,_,Z,Z,_,_,_,_,_,_],[...]"
)


def _clear_current_board(session: BridgeSession, args: NoArguments) -> ToolResult:
    try:
        session.surface.clear()
    except CellLookupError as exc:
        return ToolResult.failure(f"Failed to clear the board: {exc}")
    return ToolResult.ok("Cleared the board.")


def _get_current_board(session: BridgeSession, args: NoArguments) -> ToolResult:
    return ToolResult.ok(format_board(session.surface.read_board()))


def _get_page_number(session: BridgeSession, args: NoArguments) -> ToolResult:
    return ToolResult.ok(str(session.navigator.page_number()))


def _get_page_count(session: BridgeSession, args: NoArguments) -> ToolResult:
    return ToolResult.ok(str(session.navigator.page_count()))


def _remove_all_next_page(session: BridgeSession, args: NoArguments) -> ToolResult:
    session.navigator.remove_all_next()
    return ToolResult.ok("Removed all pages after the current page.")


def _next_page(session: BridgeSession, args: NoArguments) -> ToolResult:
    session.navigator.next()
    return ToolResult.ok("Moved to the next page.")


def _previous_page(session: BridgeSession, args: NoArguments) -> ToolResult:
    if not session.navigator.previous():
        return ToolResult.ok(FIRST_PAGE_MESSAGE)
    return ToolResult.ok("Moved to the previous page.")


def _move_to_page(session: BridgeSession, args: MoveToPageArguments) -> ToolResult:
    session.navigator.goto(args.page_number)
    return ToolResult.ok(f"Moved to page {args.page_number}.")


def _reset(session: BridgeSession, args: NoArguments) -> ToolResult:
    session.navigator.reset()
    session.reset_color()
    return ToolResult.ok("Reset all pages.")


def _get_view_url(session: BridgeSession, args: NoArguments) -> ToolResult:
    token = session.remote.evaluate(fumen_js.ENCODE_JS)
    if not token:
        raise CellLookupError("The editor did not produce a share token")
    return ToolResult.ok(f"{session.config.view_url_prefix}{token}")


def _set_color(session: BridgeSession, args: SetColorArguments) -> ToolResult:
    session.set_color(args.code)
    return ToolResult.ok(f"Set the drawing color to {args.code}.")


def _draw_pixel(session: BridgeSession, args: DrawPixelArguments) -> ToolResult:
    index = session.codec.index_of(args.column, args.row)
    session.surface.draw(index, session.selected_color)
    return ToolResult.ok(
        f"Drew color {session.selected_color} at x={args.column}, y={args.row}."
    )


def build_dispatcher(session: BridgeSession) -> ToolDispatcher:
    """Return a dispatcher with the full tool catalog registered."""
    dispatcher = ToolDispatcher(session)
    register = dispatcher.register

    register("clearCurrentBoard", "Clear every cell of the current board.")(
        _clear_current_board
    )
    register("getCurrentBoard", _BOARD_DESCRIPTION)(_get_current_board)
    register("getPageNumber", "Get the 1-based number of the current page.")(
        _get_page_number
    )
    register("getPageCount", "Get the number of pages.")(_get_page_count)
    register("removeAllNextPage", "Delete every page after the current page.")(
        _remove_all_next_page
    )
    register(
        "nextPage",
        "Move to the next page. A new empty page is created after the last one.",
    )(_next_page)
    register("previousPage", "Move to the previous page.")(_previous_page)
    register(
        "moveToPage", "Move to the given 1-based page number.", MoveToPageArguments
    )(_move_to_page)
    register("reset", "Delete all pages and start again from one empty page.")(_reset)
    register("getViewUrl", "Get a shareable URL showing all pages.")(_get_view_url)
    register(
        "setColor",
        "Select the color used by drawPixel: 1=I, 2=L, 3=O, 4=Z, 5=T, 6=J, 7=S, 8=garbage.",
        SetColorArguments,
    )(_set_color)
    register(
        "drawPixel",
        "Paint the cell at column x (0-9), row y (0-19, top first) with the selected color.",
        DrawPixelArguments,
    )(_draw_pixel)

    logger.debug("Registered %d tools", len(dispatcher))
    return dispatcher
