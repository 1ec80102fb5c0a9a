"""Selenium WebDriver session implementation."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chromium.options import ChromiumOptions
from selenium.webdriver.common.options import ArgOptions
from selenium.webdriver.remote.webdriver import WebDriver

from webdriver_test_action.capabilities import Capabilities
from webdriver_test_action.drivers.base import (
    BrowserSession,
    SessionBuildError,
    SessionInfo,
)
from webdriver_test_action.drivers.selenium.config import SeleniumConfig
from webdriver_test_action.models.result import PageResult

log = logging.getLogger(__name__)

OPTIONS_BY_BROWSER: Mapping[str, Callable[[], ArgOptions]] = {
    "firefox": webdriver.FirefoxOptions,
    "chrome": webdriver.ChromeOptions,
    "MicrosoftEdge": webdriver.EdgeOptions,
    "safari": webdriver.SafariOptions,
    "internet explorer": webdriver.IeOptions,
}

LOCAL_DRIVERS: Mapping[str, Callable[..., WebDriver]] = {
    "firefox": webdriver.Firefox,
    "chrome": webdriver.Chrome,
    "MicrosoftEdge": webdriver.Edge,
    "safari": webdriver.Safari,
    "internet explorer": webdriver.Ie,
}

READ_GLOBAL_SCRIPT = "return window[arguments[0]];"


def build_options(capabilities: Capabilities) -> ArgOptions:
    """Create browser options for the requested capabilities.

    Raises:
        ValueError: For unknown browsers, or mobile emulation on a browser
            that is not Chromium based

    """
    try:
        options = OPTIONS_BY_BROWSER[capabilities.browser_name]()
    except KeyError:
        raise ValueError(
            f"Unsupported browser '{capabilities.browser_name}'. "
            f"Available browsers: {list(OPTIONS_BY_BROWSER)}"
        ) from None

    if capabilities.mobile_emulation:
        if not isinstance(options, ChromiumOptions):
            raise ValueError(
                f"Mobile emulation is not available for {capabilities.browser_name}"
            )
        options.add_experimental_option(
            "mobileEmulation",
            {"deviceMetrics": dict(capabilities.device_metrics)},
        )

    return options


def build_webdriver(config: SeleniumConfig, capabilities: Capabilities) -> WebDriver:
    """Start a WebDriver session, remote when ``config.remote_url`` is set.

    Blocks until the browser is ready; call it off the event loop.
    """
    options = build_options(capabilities)

    if config.remote_url:
        log.info(
            "Starting remote %s session on %s",
            capabilities.label,
            config.remote_url,
        )
        driver = webdriver.Remote(command_executor=config.remote_url, options=options)
    else:
        log.info("Starting local %s session", capabilities.label)
        driver = LOCAL_DRIVERS[capabilities.browser_name](options=options)

    if config.page_load_timeout is not None:
        driver.set_page_load_timeout(config.page_load_timeout)
    if config.script_timeout is not None:
        driver.set_script_timeout(config.script_timeout)
    return driver


@dataclass(frozen=True, kw_only=True)
class SeleniumSession(BrowserSession):
    """Browser session backed by a Selenium WebDriver.

    The Selenium client is blocking, so every call runs in a worker thread.
    """

    capabilities: Capabilities
    driver: WebDriver = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: SeleniumConfig, capabilities: Capabilities
    ) -> AsyncGenerator["SeleniumSession", None]:
        """Create session with managed driver lifecycle."""
        try:
            driver = await asyncio.to_thread(build_webdriver, config, capabilities)
        except (ValueError, WebDriverException) as e:
            raise SessionBuildError(
                f"Could not start {capabilities.label}: {e}"
            ) from e

        try:
            yield cls(capabilities=capabilities, driver=driver)
        finally:
            log.info("Closing %s session", capabilities.label)
            await asyncio.to_thread(driver.quit)

    async def open(self, url: str) -> None:
        """Navigate to the URL."""
        await asyncio.to_thread(self.driver.get, url)

    async def describe(self) -> SessionInfo:
        """Report the browser name negotiated with the remote end."""
        reported = self.driver.capabilities
        return SessionInfo(
            browser_name=reported.get("browserName", self.capabilities.browser_name),
            mobile_emulation=bool(
                reported.get(
                    "mobileEmulationEnabled", self.capabilities.mobile_emulation
                )
            ),
        )

    async def read_results(self, results_global: str) -> PageResult | None:
        """Read the results global from the current page."""
        data = await asyncio.to_thread(
            self.driver.execute_script, READ_GLOBAL_SCRIPT, results_global
        )
        if not data:
            return None
        return PageResult.model_validate(data)
