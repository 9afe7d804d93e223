"""Tests for the run_server CLI and shared CLI utilities."""

from __future__ import annotations

import logging
from unittest import mock

import pytest

from scripts import run_server
from scripts._cli_utils import setup_logging
from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.session.config import SessionConfig


class TestParseArgs:
    def test_defaults(self):
        args = run_server.parse_args([])
        assert args.config == "fumen"
        assert args.port is None
        assert not args.no_headless
        assert not args.verbose

    def test_overrides(self):
        args = run_server.parse_args(
            ["--config", "fumen-color", "--port", "3100", "--encoding", "color", "--no-headless"]
        )
        config = run_server.apply_overrides(SessionConfig(name="fumen-color"), args)
        assert config.port == 3100
        assert config.encoding == "color"
        assert config.headless is False
        assert config.host == "127.0.0.1"

    def test_no_overrides_keeps_config(self):
        config = SessionConfig(name="fumen")
        assert run_server.apply_overrides(config, run_server.parse_args([])) is config


class TestMain:
    @pytest.fixture(autouse=True)
    def _quiet(self):
        with mock.patch.object(run_server, "setup_logging"), mock.patch("dotenv.load_dotenv"):
            yield

    def test_startup_failure_returns_one(self):
        with mock.patch(
            "tetris_bridge.session.create_bridge",
            side_effect=RemoteSessionError("no browser"),
        ):
            assert run_server.main(["--port", "3999"]) == 1

    def test_serves_and_closes_bridge(self):
        bridge = mock.MagicMock()
        with mock.patch("tetris_bridge.session.create_bridge", return_value=bridge), mock.patch(
            "tetris_bridge.tools.build_dispatcher"
        ), mock.patch("tetris_bridge.server.create_app") as create_app, mock.patch(
            "uvicorn.run"
        ) as run:
            assert run_server.main([]) == 0

        run.assert_called_once()
        assert run.call_args.args[0] is create_app.return_value
        assert run.call_args.kwargs["port"] == 3000
        bridge.close.assert_called_once()


class TestSetupLogging:
    def test_levels(self):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            setup_logging(verbose=True)
            assert root.level == logging.DEBUG
            assert logging.getLogger("selenium").level == logging.WARNING
            assert len(root.handlers) == 1
            setup_logging(verbose=False)
            assert root.level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
