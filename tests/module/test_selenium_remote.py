"""Module test running pages in a real browser through a remote Selenium server."""

import json
from urllib.parse import quote

import pytest

from webdriver_test_action.cli import run
from webdriver_test_action.models.definition import RunOptions

pytestmark = pytest.mark.module


def results_page(results: dict[str, object], delay_ms: int = 300) -> str:
    """Build a data: URL that publishes results after a delay."""
    html = (
        "<!doctype html><title>suite</title><script>"
        f"setTimeout(function () {{ window.mochaResults = {json.dumps(results)}; }},"
        f" {delay_ms});"
        "</script>"
    )
    return "data:text/html," + quote(html)


async def test_collects_results_from_remote_browser(
    selenium_url: str,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Visits pages in order and fails the run when a page reports failures."""
    monkeypatch.setenv("REMOTE_SELENIUM_URL", selenium_url)
    passing = results_page({"passes": 3, "failures": 0, "duration": 120})
    failing = results_page(
        {
            "passes": 1,
            "failures": 1,
            "duration": 80,
            "reports": [
                {
                    "message": "expected true to be false",
                    "name": "toggles",
                    "titles": ["switch"],
                    "stack": "AssertionError: expected true to be false",
                }
            ],
        }
    )

    exit_code = await run(
        {
            "firefox": RunOptions(
                browser="firefox",
                urls=[passing, failing],
                poll_interval=0.1,
                result_timeout=30,
            ),
            "safari": RunOptions(browser="safari", urls=[passing]),
        }
    )

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert output["failed"] == 1
    assert output["skipped"] == 1
    firefox = output["results"][0]
    assert firefox["passes"] == 4
    assert firefox["failures"] == 1
    assert [page["url"] for page in firefox["pages"]] == [passing, failing]
