"""Tests for BrowserSession base class."""

from collections.abc import Sequence
from dataclasses import dataclass, field

import pytest

from webdriver_test_action.drivers.base import BrowserSession, SessionInfo
from webdriver_test_action.models.result import PageResult
from webdriver_test_action.testing.factories import PageResultFactory


@dataclass(frozen=True, kw_only=True)
class MockSession(BrowserSession):
    """Test session that returns configurable read responses."""

    read_responses: Sequence[PageResult | None] = field(default_factory=list)
    _read_count: list[int] = field(default_factory=lambda: [0])
    globals_read: list[str] = field(default_factory=list)

    async def open(self, url: str) -> None:  # pragma: no cover
        """Do nothing."""

    async def describe(self) -> SessionInfo:  # pragma: no cover
        """Return a fixed browser."""
        return SessionInfo(browser_name="firefox")

    async def read_results(self, results_global: str) -> PageResult | None:
        """Return next response from read_responses, then keep returning None."""
        self.globals_read.append(results_global)
        idx = self._read_count[0]
        self._read_count[0] += 1
        if idx < len(self.read_responses):
            return self.read_responses[idx]
        return None  # Page never finishes if responses exhausted


class TestWaitForResults:
    """Tests for wait_for_results method."""

    async def test_returns_immediately_when_published(self) -> None:
        """Returns results when the first read finds them."""
        expected = PageResultFactory.build()
        session = MockSession(read_responses=[expected])

        result = await session.wait_for_results("mochaResults", poll_interval=0.01)

        assert result == expected
        assert session._read_count[0] == 1

    async def test_polls_until_published(self) -> None:
        """Keeps reading until the page publishes results."""
        expected = PageResultFactory.build()
        session = MockSession(read_responses=[None, None, expected])

        result = await session.wait_for_results("mochaResults", poll_interval=0.01)

        assert result == expected
        assert session._read_count[0] == 3

    async def test_raises_timeout_error(self) -> None:
        """Raises TimeoutError when timeout exceeded."""
        session = MockSession(read_responses=[None, None, None])

        with pytest.raises(TimeoutError, match="was not set within"):
            await session.wait_for_results(
                "mochaResults", timeout=0.05, poll_interval=0.02
            )

    async def test_waits_without_deadline_when_timeout_is_none(self) -> None:
        """Without a timeout it keeps polling past any fixed deadline."""
        expected = PageResultFactory.build()
        session = MockSession(read_responses=[None] * 10 + [expected])

        result = await session.wait_for_results(
            "mochaResults", timeout=None, poll_interval=0.001
        )

        assert result == expected
        assert session._read_count[0] == 11

    async def test_reads_requested_global(self) -> None:
        """Passes the global name to read_results."""
        session = MockSession(read_responses=[PageResultFactory.build()])

        await session.wait_for_results("jasmineResults", poll_interval=0.01)

        assert session.globals_read == ["jasmineResults"]


def test_session_info_label() -> None:
    """Label reflects mobile emulation."""
    assert SessionInfo(browser_name="chrome", mobile_emulation=True).label == (
        "chrome-mobile"
    )
    assert SessionInfo(browser_name="firefox").label == "firefox"
