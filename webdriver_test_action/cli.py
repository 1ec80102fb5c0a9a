"""CLI entry point for the WebDriver test action."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from webdriver_test_action.definition_loader import load_run_definition
from webdriver_test_action.drivers.loading import (
    DriverNotFoundError,
    load_driver_manifest,
)
from webdriver_test_action.drivers.manifest import DriverManifest
from webdriver_test_action.drivers.selenium.config import REMOTE_URL_ENV
from webdriver_test_action.models.definition import (
    RunDefinition,
    RunOptions,
    TargetOptions,
)
from webdriver_test_action.models.result import RunResult
from webdriver_test_action.runner import WebDriverRunner

DEFAULT_TARGET = "default"

STATUS_SYMBOLS = {
    "success": "✓",
    "failure": "✗",
    "error": "!",
    "skipped": "-",
    "aborted": "⊘",
}


class UnknownTargetError(Exception):
    """Raised when a requested target is not in the run definition."""


def log_failures(log: logging.Logger, run_results: Sequence[RunResult]) -> None:
    """Log every collected test failure with its origin."""
    for run_result in run_results:
        for failure in run_result.failures:
            log.error("URL: %s", failure.url)
            log.error("Browser: %s", failure.browser)
            log.error("Describe: %s", " > ".join(failure.report.titles))
            log.error("it %s", failure.report.name)
            log.error("%s", failure.report.stack)


def log_results_summary(log: logging.Logger, run_results: Sequence[RunResult]) -> None:
    """Log a formatted summary of run results."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for run_result in run_results:
        symbol = STATUS_SYMBOLS.get(run_result.status, "?")
        log.info(
            "%s %s [%s]: %s (passes: %d, failures: %d, %.2fs)",
            symbol,
            run_result.target,
            run_result.browser,
            run_result.status,
            run_result.passes,
            run_result.failure_count,
            run_result.duration,
        )
        if run_result.message:
            log.info("  Message: %s", run_result.message)


def format_output(run_results: Sequence[RunResult]) -> dict[str, Any]:
    """Format run results for JSON output."""
    all_results = [
        {
            "target": run_result.target,
            "browser": run_result.browser,
            "status": run_result.status,
            "passes": run_result.passes,
            "failures": run_result.failure_count,
            "duration": run_result.duration,
            "message": run_result.message,
            "pages": [
                {
                    "url": page.url,
                    "passes": page.passes,
                    "failures": page.failures,
                    "duration": page.duration,
                }
                for page in run_result.pages
            ],
        }
        for run_result in run_results
    ]

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "success"),
        "failed": sum(1 for r in all_results if r["status"] == "failure"),
        "skipped": sum(1 for r in all_results if r["status"] == "skipped"),
        "aborted": sum(1 for r in all_results if r["status"] == "aborted"),
        "errors": sum(1 for r in all_results if r["status"] == "error"),
        "results": all_results,
    }


def select_targets(
    definition: RunDefinition,
    target_names: Sequence[str] = (),
    overrides: TargetOptions | None = None,
) -> Mapping[str, RunOptions]:
    """Resolve definition targets, keeping only the requested ones."""
    targets = definition.resolve_targets()

    unknown = [name for name in target_names if name not in targets]
    if unknown:
        raise UnknownTargetError(
            f"Unknown target(s) {unknown}. Available targets: {list(targets)}"
        )

    selected = {
        name: options
        for name, options in targets.items()
        if not target_names or name in target_names
    }
    if overrides is None:
        return selected
    return {name: overrides.apply_to(options) for name, options in selected.items()}


def build_driver_config[ConfigT: BaseModel](
    manifest: DriverManifest[ConfigT],
    driver_config_json: str,
    environ: Mapping[str, str] = os.environ,
) -> ConfigT:
    """Parse driver configuration, filling the remote endpoint from the environment."""
    config_dict = json.loads(driver_config_json)
    if "remote_url" in manifest.config_cls.model_fields and environ.get(
        REMOTE_URL_ENV
    ):
        config_dict.setdefault("remote_url", environ[REMOTE_URL_ENV])
    return manifest.config_cls(**config_dict)


async def run(
    targets: Mapping[str, RunOptions],
    driver_key: str = "selenium",
    driver_config_json: str = "{}",
) -> int:
    """Run browser tests and return exit code."""
    log = logging.getLogger("webdriver_test_action")

    log.info("Loading driver: %s", driver_key)
    manifest = load_driver_manifest(driver_key)
    config = build_driver_config(manifest, driver_config_json)

    if not targets:
        log.info("No targets to run")
        print(json.dumps(format_output([]), indent=2))
        return 0

    log.info("Running %d target(s)...", len(targets))
    runner = WebDriverRunner(manifest=manifest, config=config)
    run_results = await runner.run_targets(targets)

    log_failures(log, run_results)
    log_results_summary(log, run_results)

    output = format_output(run_results)
    print(json.dumps(output, indent=2))

    has_failures = any(
        result.status in {"failure", "error"} for result in run_results
    )

    return 1 if has_failures else 0


async def load_targets(args: argparse.Namespace) -> Mapping[str, RunOptions]:
    """Build the targets to run from a definition file or ad-hoc arguments."""
    overrides: dict[str, Any] = {}
    if args.browser is not None:
        overrides["browser"] = args.browser
    if args.url:
        overrides["urls"] = args.url
    if args.poll_interval is not None:
        overrides["poll_interval"] = args.poll_interval
    if args.no_timeout:
        overrides["result_timeout"] = None
    elif args.timeout is not None:
        overrides["result_timeout"] = args.timeout

    if args.definition is None:
        return {DEFAULT_TARGET: RunOptions.model_validate(overrides)}

    definition = await load_run_definition(args.definition)
    return select_targets(
        definition, args.target, TargetOptions.model_validate(overrides)
    )


async def _main(args: argparse.Namespace) -> int:
    targets = await load_targets(args)
    return await run(
        targets,
        driver_key=args.driver,
        driver_config_json=args.driver_config,
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run in-page browser test suites through WebDriver"
    )
    parser.add_argument(
        "--browser",
        help="Browser name, e.g. firefox, chrome, chrome-mobile, edge, ie, safari",
    )
    parser.add_argument(
        "--url",
        action="append",
        default=[],
        help="Page to test (repeat for several pages, visited in order)",
    )
    parser.add_argument(
        "--definition",
        type=Path,
        help="Path to a YAML run definition with named targets",
    )
    parser.add_argument(
        "--target",
        action="append",
        default=[],
        help="Target from the run definition to run (default: all)",
    )
    parser.add_argument(
        "--driver",
        default="selenium",
        help="Driver key (default: selenium)",
    )
    parser.add_argument(
        "--driver-config",
        default="{}",
        help=f"JSON configuration for the driver ({REMOTE_URL_ENV} sets remote_url)",
    )
    parser.add_argument(
        "--poll-interval",
        type=float,
        help="Seconds between checks for page results",
    )
    timeout_group = parser.add_mutually_exclusive_group()
    timeout_group.add_argument(
        "--timeout",
        type=float,
        help="Seconds to wait for results on each page",
    )
    timeout_group.add_argument(
        "--no-timeout",
        action="store_true",
        help="Wait for page results without a time limit",
    )

    args = parser.parse_args()
    if args.target and args.definition is None:
        parser.error("--target requires --definition")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        exit_code = asyncio.run(_main(args))
    except (DriverNotFoundError, UnknownTargetError) as e:
        parser.exit(2, f"{parser.prog}: error: {e}\n")
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
