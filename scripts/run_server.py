#!/usr/bin/env python
"""CLI entry point -- launch the editor and serve the tool endpoint.

Opens the fumen editor in a (headless) browser, waits for the board,
then serves the JSON-RPC tool endpoint on ``/mcp``::

    # Default config (numeric field encoding, headless Chrome):
    python scripts/run_server.py

    # Read the board from cell colors and watch the browser:
    python scripts/run_server.py --encoding color --no-headless

    # Alternative config, custom port:
    python scripts/run_server.py --config fumen-color --port 3100

Values in ``.env`` are loaded before the config so that ``$VAR``
references in the YAML resolve against them.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

# Allow running as a plain script from the repository root.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from scripts._cli_utils import base_argparser, setup_logging  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list[str] or None
        Command-line arguments.  If None, uses ``sys.argv[1:]``.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = base_argparser("Serve the Tetris board bridge tool endpoint.")
    parser.add_argument("--host", default=None, help="Bind address (default: from config)")
    parser.add_argument("--port", type=int, default=None, help="Port (default: from config)")
    parser.add_argument(
        "--encoding",
        choices=["numeric", "color"],
        default=None,
        help="Raw cell encoding to read (default: from config)",
    )
    parser.add_argument(
        "--browser",
        choices=["chrome", "firefox"],
        default=None,
        help="Browser to launch (default: from config)",
    )
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Show the browser window",
    )
    return parser.parse_args(argv)


def apply_overrides(config, args: argparse.Namespace):
    """Return ``config`` with the CLI overrides from ``args`` applied."""
    overrides = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("encoding", args.encoding),
            ("browser", args.browser),
        )
        if value is not None
    }
    if args.no_headless:
        overrides["headless"] = False
    return dataclasses.replace(config, **overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    """Run the server until interrupted.

    Returns
    -------
    int
        Exit code (0 on success).
    """
    args = parse_args(argv)
    setup_logging(args.verbose)

    import uvicorn
    from dotenv import load_dotenv

    from tetris_bridge.errors import BridgeError
    from tetris_bridge.server import create_app
    from tetris_bridge.session import create_bridge, load_session_config
    from tetris_bridge.tools import build_dispatcher

    load_dotenv()

    try:
        config = apply_overrides(load_session_config(args.config, args.configs_dir), args)
        bridge = create_bridge(config)
    except (FileNotFoundError, BridgeError) as exc:
        logger.error("Could not start the bridge: %s", exc)
        return 1

    try:
        app = create_app(build_dispatcher(bridge))
        logger.info("Server is running on http://%s:%d/mcp", config.host, config.port)
        uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    finally:
        bridge.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
