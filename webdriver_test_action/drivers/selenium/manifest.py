"""Selenium driver manifest."""

from webdriver_test_action.drivers.manifest import DriverManifest
from webdriver_test_action.drivers.selenium.config import SeleniumConfig
from webdriver_test_action.drivers.selenium.session import SeleniumSession

selenium_manifest = DriverManifest(
    config_cls=SeleniumConfig,
    session_factory=SeleniumSession.from_config,
    is_remote=lambda config: config.is_remote,
)
