"""Abstract base class for browser sessions."""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass

from webdriver_test_action.capabilities import browser_label
from webdriver_test_action.models.result import PageResult


class SessionBuildError(Exception):
    """Raised when a browser session cannot be created."""


@dataclass(frozen=True, kw_only=True)
class SessionInfo:
    """Browser details reported by the remote end of a session."""

    browser_name: str
    mobile_emulation: bool = False

    @property
    def label(self) -> str:
        return browser_label(self.browser_name, self.mobile_emulation)


@dataclass(frozen=True, kw_only=True)
class BrowserSession(ABC):
    """Abstract base for a live browser session.

    Implementations wrap a browser automation client. Sessions are created
    and released by the factory registered in a driver manifest.
    """

    @abstractmethod
    async def open(self, url: str) -> None:
        """Navigate to ``url`` and wait for the page to load."""

    @abstractmethod
    async def describe(self) -> SessionInfo:
        """Return the browser details negotiated for this session."""

    @abstractmethod
    async def read_results(self, results_global: str) -> PageResult | None:
        """Read the results global once.

        Args:
            results_global: Name of the window global holding the results

        Returns:
            Parsed results if the page has published them, None otherwise

        """

    async def wait_for_results(
        self,
        results_global: str,
        timeout: float | None = None,
        poll_interval: float = 0.5,
    ) -> PageResult:
        """Wait until the page publishes its results.

        Args:
            results_global: Name of the window global holding the results
            timeout: Maximum wait time in seconds, None to wait forever
            poll_interval: Seconds between polls

        Returns:
            Results published by the page

        Raises:
            TimeoutError: If no results appear within timeout

        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while True:
            if (result := await self.read_results(results_global)) is not None:
                return result

            if deadline is not None and loop.time() >= deadline:
                raise TimeoutError(
                    f"window.{results_global} was not set within {timeout} seconds"
                )

            await asyncio.sleep(poll_interval)
