"""The shared bridge session.

Exactly one :class:`BridgeSession` exists per process.  It owns the
remote session and everything derived from it, plus the only piece of
bridge-local state: the selected drawing color.  Tool handlers receive
it by reference and must hold :attr:`BridgeSession.lock` for their whole
sequence of remote calls.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from tetris_bridge.session.base import RemoteSession
from tetris_bridge.session.config import SessionConfig

if TYPE_CHECKING:
    from tetris_bridge.board.codec import BoardCodec
    from tetris_bridge.board.surface import BoardSurface
    from tetris_bridge.navigation.navigator import PageNavigator

logger = logging.getLogger(__name__)


class BridgeSession:
    """Everything a tool handler needs, behind one mutex.

    Parameters
    ----------
    config : SessionConfig
        The configuration the session was built from.
    remote : RemoteSession
        The live editor.
    codec : BoardCodec
        Codec for the configured encoding.
    surface : BoardSurface
        Board I/O for the configured encoding.
    navigator : PageNavigator
        Page cursor state machine.
    """

    def __init__(
        self,
        config: SessionConfig,
        remote: RemoteSession,
        codec: "BoardCodec",
        surface: "BoardSurface",
        navigator: "PageNavigator",
    ) -> None:
        self.config = config
        self.remote = remote
        self.codec = codec
        self.surface = surface
        self.navigator = navigator
        self.lock = threading.Lock()
        self.selected_color: int = config.default_color

    def set_color(self, color: int) -> None:
        if not 1 <= color <= 8:
            raise ValueError(f"color must be between 1 and 8, got {color}")
        self.selected_color = color
        logger.debug("Selected color %d", color)

    def reset_color(self) -> None:
        self.selected_color = self.config.default_color

    def close(self) -> None:
        self.remote.close()

    def __repr__(self) -> str:
        return (
            f"<BridgeSession({self.config.name!r}, encoding={self.config.encoding!r}, "
            f"color={self.selected_color})>"
        )
