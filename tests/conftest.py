"""Shared pytest fixtures for the tetris-bridge test suite.

Provides :class:`FakeEditorSession`, an in-memory stand-in for the fumen
editor that understands the scripts in :mod:`tetris_bridge.session.fumen_js`,
renders cell styles from its field and toggles cells on click.  Bridges
built on it are parameterized across both raw encodings so each
behavioural test runs once per encoding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import pytest

from tetris_bridge.board.codec import CELL_CODES, ColorEncoding
from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.session import fumen_js
from tetris_bridge.session.base import RemoteSession
from tetris_bridge.session.config import SessionConfig
from tetris_bridge.session.factory import create_bridge
from tetris_bridge.tools import build_dispatcher

logger = logging.getLogger(__name__)

FIELD_LENGTH = 240
HEADER = 30

_SWATCHES = ColorEncoding()

# ---------------------------------------------------------------------------
# Fake editor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FakeCell:
    """Handle for one cell element of the fake editor."""

    index: int


class FakeEditorSession(RemoteSession):
    """In-memory editor with pages, a field array and clickable cells.

    Parameters
    ----------
    paint_color : int
        Code a click paints into an empty cell.
    stubborn : set[int], optional
        Flat field indices whose first click is ignored.
    """

    def __init__(self, paint_color: int = 8, stubborn: set[int] | None = None) -> None:
        self.frames: list[list[int]] = [[0] * FIELD_LENGTH]
        self.current = 0
        self.paint_color = paint_color
        self.stubborn = set(stubborn or ())
        self.calls: list[tuple] = []
        self.ready_calls = 0
        self.closed = False
        self._scripts = {
            fumen_js.READ_FIELD_JS: self._read_field,
            fumen_js.PAGE_NUMBER_JS: lambda: self.current,
            fumen_js.PAGE_COUNT_JS: lambda: len(self.frames),
            fumen_js.CLEAR_FIELD_JS: self._clear,
            fumen_js.DRAW_PIXEL_JS: self._draw,
            fumen_js.NEXT_PAGE_JS: self._next,
            fumen_js.PREVIOUS_PAGE_JS: self._previous,
            fumen_js.GOTO_PAGE_JS: self._goto,
            fumen_js.REMOVE_NEXT_PAGES_JS: self._remove_next,
            fumen_js.RESET_JS: self._reset,
            fumen_js.ENCODE_JS: lambda: f"v115@fake{len(self.frames)}",
        }

    # -- Helpers for tests ---------------------------------------------

    @property
    def field(self) -> list[int]:
        return self.frames[self.current]

    def set_board_cell(self, index: int, code: Any) -> None:
        self.field[HEADER + index] = code

    @property
    def mutations(self) -> list[tuple]:
        """Calls that could change editor state."""
        readonly = {
            fumen_js.READ_FIELD_JS,
            fumen_js.PAGE_NUMBER_JS,
            fumen_js.PAGE_COUNT_JS,
        }
        return [
            call
            for call in self.calls
            if call[0] == "click" or (call[0] == "evaluate" and call[1] not in readonly)
        ]

    # -- RemoteSession -------------------------------------------------

    def evaluate(self, script: str, *args: Any) -> Any:
        self.calls.append(("evaluate", script, args))
        handler = self._scripts.get(script)
        if handler is None:
            raise RemoteSessionError("Unknown script")
        return handler(*args)

    def query_cells(self, selector: str) -> list[FakeCell]:
        self.calls.append(("query_cells", selector))
        return [FakeCell(i) for i in range(FIELD_LENGTH)]

    def read_attribute(self, cell: FakeCell, name: str) -> str:
        self.calls.append(("read_attribute", cell.index, name))
        if name != "style":
            return ""
        code = self.field[cell.index]
        # Codes the editor never produces render as an unmapped swatch.
        swatch = _SWATCHES.token_for(CELL_CODES[code]) if code in CELL_CODES else "rgb(1, 2, 3)"
        return f"border: 1px solid rgb(34, 34, 34); background-color: {swatch};"

    def click(self, cell: FakeCell) -> None:
        self.calls.append(("click", cell.index))
        if cell.index in self.stubborn:
            self.stubborn.discard(cell.index)
            return
        field = self.field
        field[cell.index] = 0 if field[cell.index] else self.paint_color

    def wait_ready(self) -> None:
        self.ready_calls += 1

    def close(self) -> None:
        self.closed = True

    # -- Script behaviour ----------------------------------------------

    def _read_field(self) -> list[Any]:
        # Non-numbers cross the WebDriver boundary as null.
        return [
            v if isinstance(v, (int, float)) and not isinstance(v, bool) else None
            for v in self.field
        ]

    def _clear(self, offset: int) -> bool:
        for i in range(offset, offset + 200):
            self.field[i] = 0
        return True

    def _draw(self, index: int, color: int, offset: int) -> int:
        self.field[offset + index] = color
        return color

    def _next(self) -> int:
        if self.current + 1 >= len(self.frames):
            self.frames.append([0] * FIELD_LENGTH)
        self.current += 1
        return self.current

    def _previous(self) -> int:
        if self.current > 0:
            self.current -= 1
        return self.current

    def _goto(self, target: int) -> int:
        while len(self.frames) <= target:
            self.frames.append([0] * FIELD_LENGTH)
        self.current = target
        return self.current

    def _remove_next(self) -> int:
        del self.frames[self.current + 1 :]
        return len(self.frames)

    def _reset(self) -> int:
        self.frames = [[0] * FIELD_LENGTH]
        self.current = 0
        return 1


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_editor() -> FakeEditorSession:
    return FakeEditorSession()


@pytest.fixture(params=["numeric", "color"])
def encoding(request) -> str:
    """Each bridge-level test runs once per raw encoding."""
    return request.param


@pytest.fixture
def session_config(encoding: str) -> SessionConfig:
    return SessionConfig(name=f"test-{encoding}", encoding=encoding)


@pytest.fixture
def bridge(session_config: SessionConfig, fake_editor: FakeEditorSession):
    return create_bridge(session_config, remote=fake_editor)


@pytest.fixture
def dispatcher(bridge):
    return build_dispatcher(bridge)
