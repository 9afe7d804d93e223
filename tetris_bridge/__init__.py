"""Tetris board bridge.

Drives a headless session of the fumen editor and exposes its board
and pages to tool-calling clients over a JSON-RPC endpoint.
"""

__version__ = "1.0.0"
