"""Board codec: canonical cells and the editor's raw cell encodings.

The editor exposes a board in one of two raw forms depending on how it
is read:

- **color**: each cell element carries an inline ``style`` whose
  background swatch identifies the piece (``rgb(0, 0, 0)`` is empty).
  The style string may hold unrelated declarations, so matching is by
  substring containment.
- **numeric**: the editor's field array holds a small integer code per
  cell (``0`` empty, ``1``-``7`` pieces, ``8`` garbage).  Matching is
  exact.

Both decode to the same :class:`Cell` enum.  The flat list of raw
samples always starts with ``header_offset`` cells that are not part of
the visible 20 x 10 board.
"""

from __future__ import annotations

import abc
import enum
import logging
from typing import Any, Iterable, Sequence

from tetris_bridge.errors import BoardDecodeError, CellLookupError

logger = logging.getLogger(__name__)

BOARD_WIDTH = 10
BOARD_HEIGHT = 20
BOARD_SIZE = BOARD_WIDTH * BOARD_HEIGHT

#: Cells in the editor's flat list that precede the visible board.
DEFAULT_HEADER_OFFSET = 30


class Cell(enum.Enum):
    """Canonical board cell.  The value is the serialization symbol."""

    EMPTY = "_"
    I = "I"  # noqa: E741
    L = "L"
    O = "O"  # noqa: E741
    Z = "Z"
    T = "T"
    J = "J"
    S = "S"
    GARBAGE = "X"
    UNKNOWN = "?"

    @property
    def symbol(self) -> str:
        return self.value


#: Numeric codes used by the editor, also the valid drawing colors (1-8).
CELL_CODES: dict[int, Cell] = {
    0: Cell.EMPTY,
    1: Cell.I,
    2: Cell.L,
    3: Cell.O,
    4: Cell.Z,
    5: Cell.T,
    6: Cell.J,
    7: Cell.S,
    8: Cell.GARBAGE,
}

#: Background swatches of the editor's cell elements.
COLOR_SWATCHES: dict[str, Cell] = {
    "rgb(0, 0, 0)": Cell.EMPTY,
    "rgb(0, 153, 255)": Cell.I,
    "rgb(255, 153, 0)": Cell.L,
    "rgb(255, 255, 0)": Cell.O,
    "rgb(255, 0, 0)": Cell.Z,
    "rgb(204, 0, 255)": Cell.T,
    "rgb(0, 0, 255)": Cell.J,
    "rgb(0, 255, 0)": Cell.S,
    "rgb(153, 153, 153)": Cell.GARBAGE,
}

Board = tuple[Cell, ...]


class CellEncoding(abc.ABC):
    """A fixed ``raw token -> Cell`` table plus its matching rule."""

    #: Registry key, also the ``encoding`` value in session configs.
    name: str = ""

    def __init__(self, table: dict[Any, Cell]) -> None:
        if Cell.UNKNOWN in table.values():
            raise ValueError("Mapping tables must not map to Cell.UNKNOWN")
        if len(set(table.values())) != len(table):
            raise ValueError("Mapping tables must be injective")
        self.table = dict(table)

    @abc.abstractmethod
    def matches(self, raw: Any, token: Any) -> bool:
        """Return ``True`` if ``raw`` matches the table entry ``token``."""

    def decode(self, raw: Any) -> Cell:
        for token, cell in self.table.items():
            if self.matches(raw, token):
                return cell
        return Cell.UNKNOWN

    def token_for(self, cell: Cell) -> Any:
        """Inverse lookup, used by tests and fakes to render raw samples."""
        for token, mapped in self.table.items():
            if mapped is cell:
                return token
        raise KeyError(cell)

    def is_empty(self, raw: Any) -> bool:
        return self.decode(raw) is Cell.EMPTY

    def __repr__(self) -> str:
        return f"<{type(self).__name__}({len(self.table)} entries)>"


class ColorEncoding(CellEncoding):
    """Style strings containing one of :data:`COLOR_SWATCHES`."""

    name = "color"

    def __init__(self, table: dict[str, Cell] | None = None) -> None:
        super().__init__(COLOR_SWATCHES if table is None else table)

    def matches(self, raw: Any, token: Any) -> bool:
        return isinstance(raw, str) and token in raw


class NumericEncoding(CellEncoding):
    """Integer cell codes from the editor's field array."""

    name = "numeric"

    def __init__(self, table: dict[int, Cell] | None = None) -> None:
        super().__init__(CELL_CODES if table is None else table)

    def matches(self, raw: Any, token: Any) -> bool:
        code = _as_code(raw)
        return code is not None and code == token


def _as_code(raw: Any) -> int | None:
    """Normalize a value returned by the browser to an ``int`` code.

    WebDriver hands back JS numbers as ``int`` or ``float``.  Strings,
    booleans and non-integral numbers never match.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    return None


class BoardCodec:
    """Decode raw samples from the active encoding into a :data:`Board`.

    Parameters
    ----------
    encoding : CellEncoding
        The encoding in effect for this session.
    header_offset : int
        Number of leading samples that are not part of the board.
    """

    def __init__(
        self,
        encoding: CellEncoding,
        header_offset: int = DEFAULT_HEADER_OFFSET,
    ) -> None:
        if header_offset < 0:
            raise ValueError(f"header_offset must be >= 0, got {header_offset}")
        self.encoding = encoding
        self.header_offset = header_offset

    def decode_cell(self, raw: Any) -> Cell:
        return self.encoding.decode(raw)

    def decode_board(
        self,
        raw_samples: Sequence[Any],
        header_offset: int | None = None,
    ) -> Board:
        """Decode exactly one board from the editor's flat sample list.

        Raises
        ------
        CellLookupError
            If fewer than ``header_offset + 200`` samples are supplied.
        BoardDecodeError
            On the first sample that decodes to :attr:`Cell.UNKNOWN`.
        """
        offset = self.header_offset if header_offset is None else header_offset
        needed = offset + BOARD_SIZE
        if len(raw_samples) < needed:
            raise CellLookupError(
                f"Expected at least {needed} cells, found {len(raw_samples)}"
            )

        cells: list[Cell] = []
        for index, raw in enumerate(raw_samples[offset:needed]):
            cell = self.decode_cell(raw)
            if cell is Cell.UNKNOWN:
                logger.warning("Undecodable cell %d: %r", index, raw)
                raise BoardDecodeError(index, raw)
            cells.append(cell)
        return tuple(cells)

    @staticmethod
    def index_of(x: int, y: int) -> int:
        """Flat board index of column ``x``, row ``y``.

        Callers are expected to pass ``0 <= x < 10`` and ``0 <= y < 20``;
        the value is not range-checked.
        """
        return y * BOARD_WIDTH + x

    def __repr__(self) -> str:
        return f"<BoardCodec({self.encoding.name!r}, header_offset={self.header_offset})>"


def board_rows(board: Sequence[Cell]) -> list[tuple[Cell, ...]]:
    """Split a flat board into its 20 rows of 10 cells."""
    if len(board) != BOARD_SIZE:
        raise ValueError(f"A board has {BOARD_SIZE} cells, got {len(board)}")
    return [
        tuple(board[start : start + BOARD_WIDTH])
        for start in range(0, BOARD_SIZE, BOARD_WIDTH)
    ]


def format_board(board: Sequence[Cell]) -> str:
    """Serialize a board as ``[_,_,Z,...],[...]``, one bracket per row."""
    return ",".join(_format_row(row) for row in board_rows(board))


def _format_row(row: Iterable[Cell]) -> str:
    return "[" + ",".join(cell.symbol for cell in row) + "]"
