"""Selenium-backed remote session for the fumen editor.

Launches an isolated (by default headless) browser via Selenium
WebDriver, opens the editor URL and exposes the page through the
:class:`~tetris_bridge.session.base.RemoteSession` contract.
:meth:`SeleniumSession.close` calls ``driver.quit()`` which tears down
the whole browser process tree.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.common.by import By
from selenium.webdriver.firefox.options import Options as FirefoxOptions
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from tetris_bridge.errors import RemoteSessionError
from tetris_bridge.session.base import RemoteSession
from tetris_bridge.session.config import SessionConfig

logger = logging.getLogger(__name__)

#: Browsers supported by :class:`SeleniumSession`.
SUPPORTED_BROWSERS = ("chrome", "firefox")


def build_driver(config: SessionConfig) -> webdriver.Remote:
    """Launch the browser described by ``config`` and return its driver.

    Raises
    ------
    RemoteSessionError
        If the browser is unknown or fails to start.
    """
    if config.browser not in SUPPORTED_BROWSERS:
        raise RemoteSessionError(
            f"Unknown browser {config.browser!r}. Supported: {list(SUPPORTED_BROWSERS)}"
        )

    logger.info(
        "Launching %s via Selenium (headless=%s) ...", config.browser, config.headless
    )
    try:
        if config.browser == "chrome":
            opts = ChromeOptions()
            if config.headless:
                opts.add_argument("--headless=new")
            opts.add_argument("--no-first-run")
            opts.add_argument("--no-default-browser-check")
            opts.add_argument("--disable-extensions")
            for arg in config.browser_args:
                opts.add_argument(arg)
            return webdriver.Chrome(options=opts)

        # browser_args are Chrome switches.
        opts = FirefoxOptions()
        if config.headless:
            opts.add_argument("-headless")
        opts.set_preference("browser.shell.checkDefaultBrowser", False)
        opts.set_preference("datareporting.policy.dataSubmissionEnabled", False)
        opts.set_preference("toolkit.telemetry.reportingpolicy.firstRun", False)
        return webdriver.Firefox(options=opts)
    except WebDriverException as exc:
        raise RemoteSessionError(f"Could not launch {config.browser}: {exc.msg}") from exc


class SeleniumSession(RemoteSession):
    """Remote session backed by a Selenium WebDriver.

    Parameters
    ----------
    config : SessionConfig
        Session configuration (URL, browser, selectors, timeouts).
    driver : selenium.webdriver.Remote, optional
        An already-running driver.  If omitted, one is launched with
        :func:`build_driver`.
    """

    def __init__(self, config: SessionConfig, driver: Any | None = None) -> None:
        self.config = config
        self._driver = driver if driver is not None else build_driver(config)

        try:
            self._driver.set_page_load_timeout(config.page_load_timeout_s)
            self._driver.get(config.url)
        except WebDriverException as exc:
            self.close()
            raise RemoteSessionError(f"Failed to load {config.url}: {exc.msg}") from exc
        logger.info("[%s] Editor loaded: %s", config.name, config.url)

    # -- Properties ----------------------------------------------------

    @property
    def driver(self) -> Any:
        """Return the underlying Selenium WebDriver instance."""
        return self._driver

    # -- RemoteSession -------------------------------------------------

    def evaluate(self, script: str, *args: Any) -> Any:
        try:
            return self._require_driver().execute_script(script, *args)
        except WebDriverException as exc:
            raise RemoteSessionError(f"Script failed: {exc.msg}") from exc

    def query_cells(self, selector: str) -> Sequence[WebElement]:
        try:
            return self._require_driver().find_elements(By.CSS_SELECTOR, selector)
        except WebDriverException as exc:
            raise RemoteSessionError(f"Query {selector!r} failed: {exc.msg}") from exc

    def read_attribute(self, cell: WebElement, name: str) -> str:
        try:
            return cell.get_attribute(name) or ""
        except WebDriverException as exc:
            raise RemoteSessionError(f"Reading {name!r} failed: {exc.msg}") from exc

    def click(self, cell: WebElement) -> None:
        try:
            cell.click()
        except WebDriverException as exc:
            raise RemoteSessionError(f"Click failed: {exc.msg}") from exc

    def wait_ready(self) -> None:
        selector = self.config.ready_selector
        logger.info(
            "[%s] Waiting up to %.1fs for %s ...",
            self.config.name,
            self.config.ready_timeout_s,
            selector,
        )
        try:
            WebDriverWait(self._require_driver(), self.config.ready_timeout_s).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, selector))
            )
        except TimeoutException as exc:
            raise RemoteSessionError(
                f"Board {selector!r} did not appear within {self.config.ready_timeout_s}s"
            ) from exc
        logger.info("[%s] Board is ready", self.config.name)

    def close(self) -> None:
        if self._driver is None:
            return

        logger.info("[%s] Closing browser ...", self.config.name)
        try:
            self._driver.quit()
        except WebDriverException:
            logger.debug("driver.quit() failed", exc_info=True)
        self._driver = None

    # -- Helpers -------------------------------------------------------

    def _require_driver(self) -> Any:
        if self._driver is None:
            raise RemoteSessionError("Session is closed")
        return self._driver

    def __repr__(self) -> str:
        status = "open" if self._driver is not None else "closed"
        return f"<SeleniumSession({self.config.url!r}, {status})>"
