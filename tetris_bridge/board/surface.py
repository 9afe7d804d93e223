"""Encoding-specific board I/O against a remote session.

A :class:`BoardSurface` knows how to sample the raw cells of the
current page, how to clear it and how to paint one cell.  Each raw
encoding reads the board differently:

- :class:`NumericFieldSurface` reads and clears the editor's field
  array with a single script each.
- :class:`ColorSwatchSurface` reads every cell element's style and
  clears the board the way a user would, by clicking filled cells.

Drawing is identical for both: the editor's script surface accepts the
numeric color codes directly.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Sequence

from tetris_bridge.board.codec import BOARD_SIZE, Board, BoardCodec
from tetris_bridge.errors import CellLookupError
from tetris_bridge.session import fumen_js
from tetris_bridge.session.base import RemoteSession

logger = logging.getLogger(__name__)


class BoardSurface(abc.ABC):
    """Reads and writes the current page's board through ``session``."""

    def __init__(self, session: RemoteSession, codec: BoardCodec) -> None:
        self.session = session
        self.codec = codec

    @abc.abstractmethod
    def sample(self) -> Sequence[Any]:
        """Return the flat list of raw samples (header cells included)."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Set every board cell of the current page to empty.

        Raises
        ------
        CellLookupError
            If the board cells cannot be found.
        """

    def read_board(self) -> Board:
        return self.codec.decode_board(self.sample())

    def draw(self, index: int, color: int) -> None:
        """Paint board cell ``index`` with color code ``color``."""
        self.session.evaluate(
            fumen_js.DRAW_PIXEL_JS, index, color, self.codec.header_offset
        )


class NumericFieldSurface(BoardSurface):
    """Board access through the editor's integer field array."""

    def sample(self) -> Sequence[Any]:
        field = self.session.evaluate(fumen_js.READ_FIELD_JS)
        if field is None:
            raise CellLookupError("The editor field could not be found")
        return field

    def clear(self) -> None:
        cleared = self.session.evaluate(
            fumen_js.CLEAR_FIELD_JS, self.codec.header_offset
        )
        if not cleared:
            raise CellLookupError("The editor field could not be found")


class ColorSwatchSurface(BoardSurface):
    """Board access through the style swatches of the cell elements.

    Parameters
    ----------
    session : RemoteSession
        The live editor.
    codec : BoardCodec
        Codec using :class:`~tetris_bridge.board.codec.ColorEncoding`.
    cell_selector : str
        CSS selector enumerating the cell elements.
    style_attribute : str
        Attribute holding the swatch.
    max_clicks : int
        Clicks attempted per filled cell while clearing.  A single click
        does not always toggle a cell in the editor.
    """

    def __init__(
        self,
        session: RemoteSession,
        codec: BoardCodec,
        cell_selector: str = "#fld",
        style_attribute: str = "style",
        max_clicks: int = 2,
    ) -> None:
        super().__init__(session, codec)
        self.cell_selector = cell_selector
        self.style_attribute = style_attribute
        self.max_clicks = max_clicks

    def _board_cells(self) -> Sequence[Any]:
        cells = self.session.query_cells(self.cell_selector)
        start = self.codec.header_offset
        board = list(cells[start : start + BOARD_SIZE])
        if len(board) < BOARD_SIZE:
            raise CellLookupError(
                f"Expected {BOARD_SIZE} board cells after the first {start}, "
                f"found {len(board)}"
            )
        return board

    def _style(self, cell: Any) -> str:
        return self.session.read_attribute(cell, self.style_attribute)

    def sample(self) -> Sequence[Any]:
        # The editor lists more cells than the board; only read what is decoded.
        cells = self.session.query_cells(self.cell_selector)
        needed = self.codec.header_offset + BOARD_SIZE
        return [self._style(cell) for cell in cells[:needed]]

    def clear(self) -> None:
        encoding = self.codec.encoding
        for index, cell in enumerate(self._board_cells()):
            for attempt in range(self.max_clicks):
                if encoding.is_empty(self._style(cell)):
                    break
                logger.debug("Clicking cell %d (attempt %d)", index, attempt + 1)
                self.session.click(cell)
            else:
                if not encoding.is_empty(self._style(cell)):
                    logger.warning(
                        "Cell %d still filled after %d clicks", index, self.max_clicks
                    )
