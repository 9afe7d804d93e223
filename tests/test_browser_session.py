"""Tests for the Selenium-backed remote session.

Selenium is mocked throughout; no browser is launched.

Tests cover:

- build_driver option assembly for Chrome and Firefox, unknown browsers
  and launch failures
- SeleniumSession page load, script evaluation, cell queries,
  attribute reads, clicks and wait_ready
- Wrapping of WebDriver failures in RemoteSessionError
- close() idempotency and use after close
"""

from __future__ import annotations

from unittest import mock

import pytest
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.common.by import By

from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.session.browser_session import SeleniumSession, build_driver
from tetris_bridge.session.config import SessionConfig


# ── Helpers ─────────────────────────────────────────────────────────


def _session(driver=None, **overrides) -> SeleniumSession:
    config = SessionConfig(name="test", **overrides)
    return SeleniumSession(config, driver=driver or mock.MagicMock())


# ── build_driver ────────────────────────────────────────────────────


class TestBuildDriver:
    def test_chrome_headless_with_config_flags(self):
        with mock.patch("tetris_bridge.session.browser_session.webdriver") as wd:
            driver = build_driver(SessionConfig(name="t", browser_args=["--no-sandbox"]))

        assert driver is wd.Chrome.return_value
        options = wd.Chrome.call_args.kwargs["options"]
        assert "--headless=new" in options.arguments
        assert "--no-sandbox" in options.arguments

    def test_chrome_visible(self):
        with mock.patch("tetris_bridge.session.browser_session.webdriver") as wd:
            build_driver(SessionConfig(name="t", headless=False))
        options = wd.Chrome.call_args.kwargs["options"]
        assert "--headless=new" not in options.arguments

    def test_firefox(self):
        with mock.patch("tetris_bridge.session.browser_session.webdriver") as wd:
            driver = build_driver(SessionConfig(name="t", browser="firefox"))
        assert driver is wd.Firefox.return_value
        assert "-headless" in wd.Firefox.call_args.kwargs["options"].arguments

    def test_firefox_ignores_chrome_flags(self):
        with mock.patch("tetris_bridge.session.browser_session.webdriver") as wd:
            build_driver(SessionConfig(name="t", browser="firefox", browser_args=["--no-sandbox"]))
        assert "--no-sandbox" not in wd.Firefox.call_args.kwargs["options"].arguments

    def test_unknown_browser(self):
        with pytest.raises(RemoteSessionError, match="netscape"):
            build_driver(SessionConfig(name="t", browser="netscape"))

    def test_launch_failure(self):
        with mock.patch("tetris_bridge.session.browser_session.webdriver") as wd:
            wd.Chrome.side_effect = WebDriverException("no chromedriver")
            with pytest.raises(RemoteSessionError, match="no chromedriver"):
                build_driver(SessionConfig(name="t"))


# ── SeleniumSession ─────────────────────────────────────────────────


class TestSeleniumSession:
    def test_opens_url(self):
        driver = mock.MagicMock()
        _session(driver, url="http://localhost:9999/", page_load_timeout_s=5)
        driver.set_page_load_timeout.assert_called_once_with(5.0)
        driver.get.assert_called_once_with("http://localhost:9999/")

    def test_load_failure_quits_driver(self):
        driver = mock.MagicMock()
        driver.get.side_effect = WebDriverException("dns")
        with pytest.raises(RemoteSessionError, match="Failed to load"):
            _session(driver)
        driver.quit.assert_called_once()

    def test_evaluate_passes_arguments(self):
        driver = mock.MagicMock()
        driver.execute_script.return_value = 7
        assert _session(driver).evaluate("return arguments[0];", 7) == 7
        driver.execute_script.assert_called_once_with("return arguments[0];", 7)

    def test_evaluate_failure(self):
        driver = mock.MagicMock()
        driver.execute_script.side_effect = WebDriverException("f is not defined")
        with pytest.raises(RemoteSessionError, match="f is not defined"):
            _session(driver).evaluate("return f;")

    def test_query_cells(self):
        driver = mock.MagicMock()
        driver.find_elements.return_value = ["a", "b"]
        assert _session(driver).query_cells("#fld") == ["a", "b"]
        driver.find_elements.assert_called_once_with(By.CSS_SELECTOR, "#fld")

    def test_read_attribute(self):
        cell = mock.MagicMock()
        cell.get_attribute.return_value = None
        assert _session().read_attribute(cell, "style") == ""
        cell.get_attribute.assert_called_once_with("style")

    def test_click_failure(self):
        cell = mock.MagicMock()
        cell.click.side_effect = WebDriverException("stale element")
        with pytest.raises(RemoteSessionError, match="stale element"):
            _session().click(cell)

    def test_wait_ready(self):
        driver = mock.MagicMock()
        with mock.patch("tetris_bridge.session.browser_session.WebDriverWait") as wait:
            _session(driver, ready_timeout_s=12).wait_ready()
        wait.assert_called_once_with(driver, 12.0)
        wait.return_value.until.assert_called_once()

    def test_wait_ready_timeout(self):
        with mock.patch("tetris_bridge.session.browser_session.WebDriverWait") as wait:
            wait.return_value.until.side_effect = TimeoutException()
            with pytest.raises(RemoteSessionError, match="did not appear"):
                _session().wait_ready()

    def test_close_is_idempotent(self):
        driver = mock.MagicMock()
        session = _session(driver)
        session.close()
        session.close()
        driver.quit.assert_called_once()

    def test_use_after_close(self):
        session = _session()
        session.close()
        with pytest.raises(RemoteSessionError, match="closed"):
            session.evaluate("return 1;")

    def test_context_manager(self):
        driver = mock.MagicMock()
        with _session(driver):
            pass
        driver.quit.assert_called_once()
