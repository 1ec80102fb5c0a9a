"""Selenium driver module."""

from webdriver_test_action.drivers.selenium.config import SeleniumConfig
from webdriver_test_action.drivers.selenium.manifest import selenium_manifest
from webdriver_test_action.drivers.selenium.session import SeleniumSession

__all__ = ["SeleniumConfig", "SeleniumSession", "selenium_manifest"]
