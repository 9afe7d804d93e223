"""Shared utilities for command-line scripts.

Provides consistent logging setup and common argument parsing for the
scripts under ``scripts/``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

_COLORS = {
    "DEBUG": "\033[90m",  # grey
    "INFO": "\033[36m",  # cyan
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
_RESET = "\033[0m"

# Third-party loggers that are too chatty at INFO.
_NOISY_LOGGERS = ("selenium", "urllib3", "uvicorn.access")


class _ColorFormatter(logging.Formatter):
    """Formatter that prepends a colored level tag and timestamp."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(tz=timezone.utc).strftime("%H:%M:%S")
        color = _COLORS.get(record.levelname, "")
        tag = f"{color}[{ts}] {record.levelname:<8}{_RESET}"
        message = f"{tag} {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure root logger with colored output.

    Parameters
    ----------
    verbose : bool
        If ``True``, set level to ``DEBUG``; otherwise ``INFO``.

    Returns
    -------
    logging.Logger
        The root logger.
    """
    level = logging.DEBUG if verbose else logging.INFO
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_ColorFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    # Avoid duplicate handlers on re-init
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
    return root


# ---------------------------------------------------------------------------
# Common CLI arguments
# ---------------------------------------------------------------------------


def base_argparser(description: str) -> argparse.ArgumentParser:
    """Return an ``ArgumentParser`` pre-loaded with common options.

    Includes ``--config``, ``--configs-dir`` and ``--verbose``.
    """
    p = argparse.ArgumentParser(description=description)
    p.add_argument(
        "--config",
        default="fumen",
        help="Session config name under configs/sessions/ (default: %(default)s)",
    )
    p.add_argument(
        "--configs-dir",
        default=None,
        help="Override the session config directory",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug-level logging",
    )
    return p
