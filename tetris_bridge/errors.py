"""Exception hierarchy for the Tetris board bridge.

Domain errors (:class:`BridgeDomainError` and subclasses) are reported to
the tool-calling client as failed tool results.  Everything else is either
a validation failure raised before dispatch or an internal error surfaced
by the transport as a generic JSON-RPC error.
"""

from __future__ import annotations

from typing import Any


class BridgeError(Exception):
    """Base class for all bridge errors."""


class BridgeDomainError(BridgeError):
    """A failure the client should see as tool-result content."""


class BoardDecodeError(BridgeDomainError):
    """Raised when a raw cell sample matches no mapping entry.

    Parameters
    ----------
    index : int
        Flat board index (``0 <= index < 200``) of the offending cell.
    raw : Any
        The raw sample that failed to decode.
    """

    def __init__(self, index: int, raw: Any) -> None:
        self.index = index
        self.raw = raw
        row, col = divmod(index, 10)
        super().__init__(
            f"Could not decode cell {index} (row {row}, column {col}): {raw!r}"
        )


class CellLookupError(BridgeDomainError):
    """Raised when the board cells cannot be found in the remote session."""


class ToolArgumentError(BridgeError):
    """Raised when tool arguments fail validation.

    Parameters
    ----------
    tool : str
        Name of the tool being called.
    message : str
        Human-readable summary.
    errors : list[dict], optional
        Structured validation errors (pydantic's ``errors()`` output).
    """

    def __init__(self, tool: str, message: str, errors: list[dict] | None = None) -> None:
        self.tool = tool
        self.errors = errors or []
        super().__init__(message)


class UnknownToolError(ToolArgumentError):
    """Raised when a client calls a tool that is not in the catalog."""

    def __init__(self, tool: str) -> None:
        super().__init__(tool, f"Unknown tool: {tool!r}")


class RemoteSessionError(BridgeError):
    """Raised when the remote rendering session fails or times out."""


class SessionConfigError(BridgeError, ValueError):
    """Raised for invalid session configuration."""
