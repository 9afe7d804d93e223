"""Board model and codec: canonical cells and raw encodings.

Typical usage::

    from tetris_bridge.board import BoardCodec, NumericEncoding, format_board

    codec = BoardCodec(NumericEncoding())
    board = codec.decode_board(raw_field)
    print(format_board(board))
"""

from tetris_bridge.board.codec import (
    BOARD_HEIGHT,
    BOARD_SIZE,
    BOARD_WIDTH,
    CELL_CODES,
    COLOR_SWATCHES,
    Board,
    BoardCodec,
    Cell,
    CellEncoding,
    ColorEncoding,
    NumericEncoding,
    board_rows,
    format_board,
)
from tetris_bridge.board.surface import (
    BoardSurface,
    ColorSwatchSurface,
    NumericFieldSurface,
)

__all__ = [
    "BOARD_HEIGHT",
    "BOARD_SIZE",
    "BOARD_WIDTH",
    "CELL_CODES",
    "COLOR_SWATCHES",
    "Board",
    "BoardCodec",
    "BoardSurface",
    "Cell",
    "CellEncoding",
    "ColorEncoding",
    "ColorSwatchSurface",
    "NumericEncoding",
    "NumericFieldSurface",
    "board_rows",
    "format_board",
]
