"""Runner for visiting test pages in a browser and collecting their results."""

import logging
from collections.abc import AsyncGenerator, Mapping, Sequence
from contextlib import AsyncExitStack
from dataclasses import dataclass

from pydantic import BaseModel

from webdriver_test_action.capabilities import is_supported, parse_browser
from webdriver_test_action.drivers.base import BrowserSession
from webdriver_test_action.drivers.manifest import DriverManifest
from webdriver_test_action.models.definition import RunOptions
from webdriver_test_action.models.result import (
    RunResult,
    RunStatus,
    TestFailure,
    UrlResult,
)

log = logging.getLogger(__name__)


async def run_urls(
    session: BrowserSession, options: RunOptions
) -> AsyncGenerator[tuple[UrlResult, Sequence[TestFailure]], None]:
    """Visit each URL in order and yield its summary and failures.

    Waits on every page until it publishes its results global.
    """
    for url in options.urls:
        await session.open(url)
        info = await session.describe()
        result = await session.wait_for_results(
            options.results_global,
            timeout=options.result_timeout,
            poll_interval=options.poll_interval,
        )

        log.info("%s [%s]", url, info.label)

        failures: list[TestFailure] = []
        for report in result.reports:
            log.error("%s", report.message)
            failures.append(TestFailure(url=url, browser=info.label, report=report))

        log.log(
            logging.ERROR if result.failures else logging.INFO,
            "passes: %d, failures: %d, duration: %ss",
            result.passes,
            result.failures,
            result.duration_seconds,
        )

        yield (
            UrlResult(
                url=url,
                browser=info.label,
                passes=result.passes,
                failures=result.failures,
                duration=result.duration_seconds,
            ),
            failures,
        )


@dataclass(frozen=True, kw_only=True)
class WebDriverRunner[ConfigT: BaseModel]:
    """Runs targets one after another with a single driver."""

    manifest: DriverManifest[ConfigT]
    config: ConfigT
    platform: str | None = None

    async def run_targets(
        self, targets: Mapping[str, RunOptions]
    ) -> Sequence[RunResult]:
        """Run every target in order.

        Args:
            targets: Resolved run options mapped by target name

        Returns:
            List of run results, one per target

        """
        if not targets:
            log.info("No targets to run")
            return []

        results: list[RunResult] = []
        for name, options in targets.items():
            results.append(await self.run_target(name, options))
        return results

    async def run_target(self, name: str, options: RunOptions) -> RunResult:
        """Run one target and convert every outcome into a result."""
        if not options.urls:
            return RunResult(target=name, browser=options.browser, status="success")

        capabilities = parse_browser(options.browser)
        remote = self.manifest.is_remote(self.config)
        if not is_supported(
            capabilities.browser_name, platform=self.platform, remote=remote
        ):
            log.info(
                "Skipped %s as it is not supported on this platform",
                capabilities.label,
            )
            return RunResult(
                target=name, browser=capabilities.label, status="skipped"
            )

        pages: list[UrlResult] = []
        failures: list[TestFailure] = []
        try:
            async with AsyncExitStack() as stack:
                try:
                    session = await stack.enter_async_context(
                        self.manifest.session_factory(self.config, capabilities)
                    )
                except Exception as e:
                    log.error("%s", e)
                    log.info("Aborted testing using %s", capabilities.label)
                    return RunResult(
                        target=name,
                        browser=capabilities.label,
                        status="aborted",
                        message=str(e),
                    )

                async for page, page_failures in run_urls(session, options):
                    pages.append(page)
                    failures.extend(page_failures)
        except Exception as e:
            log.error("Run %s failed: %s", name, e, exc_info=e)
            return _result(name, capabilities.label, pages, failures, error=e)

        return _result(name, capabilities.label, pages, failures)


def _result(
    name: str,
    browser: str,
    pages: Sequence[UrlResult],
    failures: Sequence[TestFailure],
    error: BaseException | None = None,
) -> RunResult:
    # Label reported by the browser wins over the requested one
    if pages:
        browser = pages[0].browser

    if error is not None:
        status: RunStatus = "error"
    elif failures or any(page.failures for page in pages):
        status = "failure"
    else:
        status = "success"

    return RunResult(
        target=name,
        browser=browser,
        status=status,
        pages=pages,
        failures=failures,
        message=str(error) if error is not None else None,
    )
