"""Fixtures for module tests using a Selenium testcontainer."""

from collections.abc import Generator

import docker
import pytest
from docker.errors import DockerException
from selenium.webdriver import DesiredCapabilities
from testcontainers.core import testcontainers_config
from testcontainers.selenium import BrowserWebDriverContainer


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def _docker_available() -> None:
    """Skip module tests when no Docker daemon is reachable."""
    try:
        docker.from_env().ping()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")


@pytest.fixture(scope="session")
def selenium_url(_docker_available: None) -> Generator[str, None, None]:
    """Start a standalone Firefox Selenium server and return its endpoint."""
    with BrowserWebDriverContainer(DesiredCapabilities.FIREFOX.copy()) as container:
        yield container.get_connection_url()
