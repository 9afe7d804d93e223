"""Factory functions for building a bridge session from configuration.

:func:`create_bridge` maps a :class:`SessionConfig` to a remote session
(by ``adapter_type``) and to a codec/surface pair (by ``encoding``),
waits for the editor to be ready and returns the assembled
:class:`BridgeSession`.
"""

from __future__ import annotations

import logging
from typing import Callable

from tetris_bridge.errors import SessionConfigError
from tetris_bridge.session.base import RemoteSession
from tetris_bridge.session.bridge import BridgeSession
from tetris_bridge.session.config import SessionConfig

logger = logging.getLogger(__name__)

# Registries of adapter_type → session class and encoding → builder.
_ADAPTER_REGISTRY: dict[str, Callable[[SessionConfig], RemoteSession]] = {}
_SURFACE_REGISTRY: dict[str, Callable] = {}
_REGISTRY_INITIALIZED: bool = False


def _ensure_registry() -> None:
    """Lazily populate the registries to avoid circular imports."""
    global _REGISTRY_INITIALIZED
    if _REGISTRY_INITIALIZED:
        return

    from tetris_bridge.board.codec import BoardCodec, ColorEncoding, NumericEncoding
    from tetris_bridge.board.surface import ColorSwatchSurface, NumericFieldSurface

    def _numeric(remote: RemoteSession, config: SessionConfig):
        codec = BoardCodec(NumericEncoding(), header_offset=config.header_offset)
        return NumericFieldSurface(remote, codec)

    def _color(remote: RemoteSession, config: SessionConfig):
        codec = BoardCodec(ColorEncoding(), header_offset=config.header_offset)
        return ColorSwatchSurface(
            remote,
            codec,
            cell_selector=config.cell_selector,
            style_attribute=config.style_attribute,
            max_clicks=config.max_clicks,
        )

    _ADAPTER_REGISTRY.setdefault("selenium", _selenium_session)
    _SURFACE_REGISTRY.setdefault(NumericEncoding.name, _numeric)
    _SURFACE_REGISTRY.setdefault(ColorEncoding.name, _color)

    _REGISTRY_INITIALIZED = True


def _selenium_session(config: SessionConfig) -> RemoteSession:
    # Imported here so that selenium is only needed when actually launching.
    from tetris_bridge.session.browser_session import SeleniumSession

    return SeleniumSession(config)


def create_remote(config: SessionConfig) -> RemoteSession:
    """Instantiate the :class:`RemoteSession` for ``config.adapter_type``.

    Raises
    ------
    SessionConfigError
        If ``adapter_type`` is not recognised.
    """
    _ensure_registry()

    builder = _ADAPTER_REGISTRY.get(config.adapter_type)
    if builder is None:
        raise SessionConfigError(
            f"Unknown adapter_type {config.adapter_type!r}. "
            f"Available: {sorted(_ADAPTER_REGISTRY)}"
        )
    logger.info("Creating %r remote session for %r", config.adapter_type, config.name)
    return builder(config)


def create_bridge(
    config: SessionConfig,
    remote: RemoteSession | None = None,
) -> BridgeSession:
    """Assemble a ready-to-use :class:`BridgeSession`.

    Parameters
    ----------
    config : SessionConfig
        Session configuration.  ``encoding`` selects the codec and
        board surface.
    remote : RemoteSession, optional
        Use this session instead of creating one from ``adapter_type``.

    Returns
    -------
    BridgeSession
        With the remote board confirmed present (``wait_ready`` is
        called exactly once here).
    """
    from tetris_bridge.navigation.navigator import PageNavigator

    _ensure_registry()

    surface_builder = _SURFACE_REGISTRY.get(config.encoding)
    if surface_builder is None:
        raise SessionConfigError(
            f"Unknown encoding {config.encoding!r}. Available: {sorted(_SURFACE_REGISTRY)}"
        )

    owns_remote = remote is None
    if remote is None:
        remote = create_remote(config)
    try:
        remote.wait_ready()
        surface = surface_builder(remote, config)
    except BaseException:
        # A session we launched must not outlive a failed startup.
        if owns_remote:
            logger.warning("Bridge startup failed; closing %r session", config.adapter_type)
            remote.close()
        raise
    logger.info("Bridge ready: encoding=%s, %r", config.encoding, surface.codec)
    return BridgeSession(
        config=config,
        remote=remote,
        codec=surface.codec,
        surface=surface,
        navigator=PageNavigator(remote),
    )


def register_adapter(
    name: str, builder: Callable[[SessionConfig], RemoteSession]
) -> None:
    """Register a custom remote session builder for ``adapter_type``."""
    _ensure_registry()
    _ADAPTER_REGISTRY[name] = builder
    logger.info("Registered custom adapter %r", name)
