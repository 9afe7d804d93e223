"""Page/frame navigation over the editor's page sequence.

The editor holds an ordered sequence of pages (frames) and a cursor.
:class:`PageNavigator` drives that cursor through the editor's own
handlers and never keeps a local copy: every query re-reads the remote
session so the bridge cannot drift from what the editor shows.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.session import fumen_js
from tetris_bridge.session.base import RemoteSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageState:
    """Snapshot of the page cursor.

    Attributes
    ----------
    current_frame : int
        0-based index of the displayed page.
    frame_count : int
        Number of pages, always ``> current_frame``.
    """

    current_frame: int
    frame_count: int

    def __post_init__(self) -> None:
        if self.frame_count < 1:
            raise ValueError(f"frame_count must be >= 1, got {self.frame_count}")
        if not 0 <= self.current_frame < self.frame_count:
            raise ValueError(
                f"current_frame {self.current_frame} outside [0, {self.frame_count})"
            )

    @property
    def page_number(self) -> int:
        """1-based page number."""
        return self.current_frame + 1

    @property
    def is_first(self) -> bool:
        return self.current_frame == 0


class PageNavigator:
    """State machine over :class:`PageState`, realized on the editor.

    Parameters
    ----------
    session : RemoteSession
        The live editor session.
    """

    def __init__(self, session: RemoteSession) -> None:
        self.session = session

    # -- Queries -------------------------------------------------------

    def current_frame(self) -> int:
        return self._read_int(fumen_js.PAGE_NUMBER_JS, "current page")

    def page_count(self) -> int:
        return self._read_int(fumen_js.PAGE_COUNT_JS, "page count")

    def page_number(self) -> int:
        """1-based number of the displayed page."""
        return self.current_frame() + 1

    def state(self) -> PageState:
        return PageState(self.current_frame(), self.page_count())

    # -- Transitions ---------------------------------------------------

    def next(self) -> None:
        """Advance one page, appending an empty page after the last one."""
        self.session.evaluate(fumen_js.NEXT_PAGE_JS)

    def previous(self) -> bool:
        """Go back one page.

        Returns
        -------
        bool
            ``False`` (and nothing is sent to the editor) if the first
            page is already displayed, ``True`` otherwise.
        """
        if self.state().is_first:
            logger.info("Already on the first page")
            return False
        self.session.evaluate(fumen_js.PREVIOUS_PAGE_JS)
        return True

    def goto(self, page_number: int) -> None:
        """Display 1-based ``page_number``.

        There is no upper bound: the editor creates pages as needed.
        """
        if page_number < 1:
            raise ValueError(f"page_number must be >= 1, got {page_number}")
        self.session.evaluate(fumen_js.GOTO_PAGE_JS, page_number - 1)

    def remove_all_next(self) -> None:
        """Drop every page after the displayed one."""
        self.session.evaluate(fumen_js.REMOVE_NEXT_PAGES_JS)

    def reset(self) -> None:
        """Discard all pages and return to a single empty page."""
        self.session.evaluate(fumen_js.RESET_JS)

    # -- Helpers -------------------------------------------------------

    def _read_int(self, script: str, what: str) -> int:
        value = self.session.evaluate(script)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise RemoteSessionError(f"Editor returned a non-numeric {what}: {value!r}")
        return int(value)
