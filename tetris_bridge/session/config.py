"""Session configuration data structures.

A :class:`SessionConfig` describes everything the bridge needs to know
to open and read the remote editor: where it lives, how to launch the
browser, which raw cell encoding to decode, and where to serve the
tool endpoint.

Configs can be loaded from YAML files via :func:`load_session_config`.
String values in YAML configs support environment variable expansion
using ``$VAR``, ``${VAR}`` or ``${VAR:-default}`` syntax.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from tetris_bridge.errors import SessionConfigError

logger = logging.getLogger(__name__)

# Default search path for session config YAML files.
_CONFIGS_DIR = Path(__file__).resolve().parent.parent.parent / "configs" / "sessions"

# Pattern matching $VAR or ${VAR} for environment variable expansion.
_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")

_ENCODINGS = ("numeric", "color")

# Flags for running Chrome inside containers without a display.
DEFAULT_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--disable-gpu",
    "--disable-features=IsolateOrigins,site-per-process",
    "--no-zygote",
]


@dataclass
class SessionConfig:
    """Declarative description of a bridge session.

    Parameters
    ----------
    name : str
        Identifier for the config (e.g. ``"fumen"``).
    url : str
        Editor URL opened by the browser.
    adapter_type : str
        Which :class:`RemoteSession` implementation to use.  Built-in
        value: ``"selenium"``.
    encoding : str
        Raw cell encoding to decode: ``"numeric"`` (field array) or
        ``"color"`` (cell style swatches).
    browser : str
        ``"chrome"`` or ``"firefox"``.
    headless : bool
        Run the browser without a window.
    browser_args : list[str]
        Extra command-line flags for Chrome.  Firefox ignores them, since
        the defaults are Chrome switches.
    ready_selector : str
        CSS selector that must be present before the board is usable.
    ready_timeout_s : float
        Seconds to wait for ``ready_selector``.
    page_load_timeout_s : float
        Selenium page-load timeout.
    cell_selector : str
        CSS selector enumerating the editor's flat cell elements.
    style_attribute : str
        Attribute carrying a cell's color swatch.
    header_offset : int
        Leading cells (in both encodings) that are not part of the board.
    max_clicks : int
        Clicks attempted per cell when clearing via the color encoding.
    default_color : int
        Initial drawing color code (1-8).
    view_url_prefix : str
        Prefix joined with the encoder token by ``getViewUrl``.
    host : str
        Interface the tool endpoint binds to.
    port : int
        Port the tool endpoint listens on.
    """

    name: str
    url: str = "https://fumen.zui.jp/"
    adapter_type: str = "selenium"
    encoding: str = "numeric"

    # Browser
    browser: str = "chrome"
    headless: bool = True
    browser_args: list[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    ready_selector: str = "#fld"
    ready_timeout_s: float = 30.0
    page_load_timeout_s: float = 60.0

    # Board reading
    cell_selector: str = "#fld"
    style_attribute: str = "style"
    header_offset: int = 30
    max_clicks: int = 2
    default_color: int = 8
    view_url_prefix: str = "https://fumen.zui.jp/?"

    # Tool endpoint
    host: str = "127.0.0.1"
    port: int = 3000

    def __post_init__(self) -> None:
        if self.encoding not in _ENCODINGS:
            raise SessionConfigError(
                f"Unknown encoding {self.encoding!r}. Valid: {list(_ENCODINGS)}"
            )
        if not 1 <= int(self.default_color) <= 8:
            raise SessionConfigError(
                f"default_color must be between 1 and 8, got {self.default_color}"
            )
        if int(self.header_offset) < 0:
            raise SessionConfigError(
                f"header_offset must be >= 0, got {self.header_offset}"
            )
        if int(self.max_clicks) < 1:
            raise SessionConfigError(f"max_clicks must be >= 1, got {self.max_clicks}")
        if not 0 < int(self.port) < 65536:
            raise SessionConfigError(f"port out of range: {self.port}")

        # YAML env expansion yields strings for numeric fields.
        self.default_color = int(self.default_color)
        self.header_offset = int(self.header_offset)
        self.max_clicks = int(self.max_clicks)
        self.port = int(self.port)
        self.ready_timeout_s = float(self.ready_timeout_s)
        self.page_load_timeout_s = float(self.page_load_timeout_s)
        if isinstance(self.headless, str):
            self.headless = self.headless.strip().lower() in ("1", "true", "yes", "on")


def _expand_vars(value: str) -> str:
    """Expand ``$VAR`` and ``${VAR}`` references in a string.

    Undefined variables are left as-is (no error).

    Parameters
    ----------
    value : str
        String potentially containing environment variable references.

    Returns
    -------
    str
        String with known variables expanded.
    """

    def _replace(match: re.Match) -> str:
        braced = match.group(1)  # From ${...}
        bare = match.group(2)  # From $VAR
        original: str = match.group(0) or ""

        if braced is not None:
            # Support ${VAR:-default} syntax.
            if ":-" in braced:
                var_name, default = braced.split(":-", 1)
                return os.environ.get(var_name, default)
            return os.environ.get(braced, original)

        return os.environ.get(bare or "", original)

    return _ENV_VAR_RE.sub(_replace, value)


def _expand_vars_recursive(data: dict) -> dict:
    """Expand environment variables in string values and string lists."""
    expanded: dict = {}
    for key, value in data.items():
        if isinstance(value, str):
            expanded[key] = _expand_vars(value)
        elif isinstance(value, list):
            expanded[key] = [_expand_vars(v) if isinstance(v, str) else v for v in value]
        else:
            expanded[key] = value
    return expanded


def load_session_config(
    name: str,
    configs_dir: str | Path | None = None,
) -> SessionConfig:
    """Load a :class:`SessionConfig` from a YAML file.

    Searches ``configs_dir`` (default ``configs/sessions/``) for a file
    named ``<name>.yaml``.

    Parameters
    ----------
    name : str
        Config identifier matching the YAML filename (without extension).
    configs_dir : str or Path, optional
        Override the default config directory.

    Returns
    -------
    SessionConfig

    Raises
    ------
    FileNotFoundError
        If no YAML file is found for ``name``.
    SessionConfigError
        If the YAML contains unknown, missing or invalid fields.
    """
    search_dir = Path(configs_dir) if configs_dir else _CONFIGS_DIR
    config_path = search_dir / f"{name}.yaml"

    if not config_path.exists():
        raise FileNotFoundError(
            f"No session config found at {config_path}. "
            f"Available configs: {[p.stem for p in search_dir.glob('*.yaml')]}"
        )

    logger.info("Loading session config from %s", config_path)
    with open(config_path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if not isinstance(raw, dict):
        raise SessionConfigError(
            f"Expected a YAML mapping in {config_path}, got {type(raw).__name__}"
        )

    raw = _expand_vars_recursive(raw)
    raw.setdefault("name", name)

    valid_fields = {f.name for f in dataclasses.fields(SessionConfig)}
    unknown = set(raw) - valid_fields
    if unknown:
        raise SessionConfigError(
            f"Unknown fields in {config_path}: {sorted(unknown)}. "
            f"Valid fields: {sorted(valid_fields)}"
        )

    try:
        return SessionConfig(**raw)
    except (TypeError, ValueError) as exc:
        if isinstance(exc, SessionConfigError):
            raise
        raise SessionConfigError(f"Invalid config in {config_path}: {exc}") from exc
