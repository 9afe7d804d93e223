"""Remote session subsystem: open and drive the fumen editor.

Each bridge is described by a :class:`SessionConfig` and runs on top of
a :class:`RemoteSession` adapter that executes scripts, enumerates cell
elements and clicks them.

Typical usage::

    from tetris_bridge.session import load_session_config, create_bridge

    config = load_session_config("fumen")
    bridge = create_bridge(config)   # launch browser, wait for the board
    # … dispatch tool calls against bridge …
    bridge.close()
"""

from tetris_bridge.session.base import RemoteSession
from tetris_bridge.session.bridge import BridgeSession
from tetris_bridge.session.config import SessionConfig, load_session_config
from tetris_bridge.session.factory import create_bridge, create_remote, register_adapter

__all__ = [
    "BridgeSession",
    "RemoteSession",
    "SessionConfig",
    "create_bridge",
    "create_remote",
    "load_session_config",
    "register_adapter",
]
