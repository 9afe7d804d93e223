"""Abstract base class for remote rendering sessions.

A :class:`RemoteSession` is the narrow window the bridge has onto the
live editor.  It runs scripts, enumerates the cell elements that back
the board, reads their raw visual encoding and simulates clicks.

Subclasses implement the concrete mechanics (Selenium WebDriver today).
Every call is a blocking round trip to the remote session; callers
serialize access through :class:`~tetris_bridge.session.bridge.BridgeSession`.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class RemoteSession(abc.ABC):
    """Base class for all remote session adapters.

    The adapter lifecycle is:

    1. construction: connect to / launch the remote session
    2. :meth:`wait_ready`: block until the board UI is present
       (called once at bridge initialization)
    3. :meth:`evaluate` / :meth:`query_cells` / :meth:`read_attribute` /
       :meth:`click`, any number of times
    4. :meth:`close`: release the session
    """

    @abc.abstractmethod
    def evaluate(self, script: str, *args: Any) -> Any:
        """Run ``script`` against the live page and return its value.

        Positional ``args`` are exposed to the script as ``arguments[i]``.

        Raises
        ------
        RemoteSessionError
            If the script cannot be run.
        """

    @abc.abstractmethod
    def query_cells(self, selector: str) -> Sequence[Any]:
        """Return the cell handles matching ``selector`` in document order."""

    @abc.abstractmethod
    def read_attribute(self, cell: Any, name: str) -> str:
        """Return attribute ``name`` of ``cell`` (empty string if absent)."""

    @abc.abstractmethod
    def click(self, cell: Any) -> None:
        """Simulate a user click on ``cell``."""

    @abc.abstractmethod
    def wait_ready(self) -> None:
        """Block until the board UI is present.

        Raises
        ------
        RemoteSessionError
            If the board does not appear within the adapter's timeout.
        """

    def close(self) -> None:
        """Release the remote session.  Safe to call more than once."""

    # -- Context manager -----------------------------------------------

    def __enter__(self) -> "RemoteSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:  # noqa: ANN001
        self.close()
        return False
