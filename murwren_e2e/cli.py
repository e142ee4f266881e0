"""CLI entry points running a suite against the app."""

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Callable, Mapping
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from typing import TypeAlias

from murwren_e2e.driver.base import BrowserDriver
from murwren_e2e.driver.playwright import PlaywrightDriver
from murwren_e2e.models.config import BrowserConfig, HarnessConfig
from murwren_e2e.report import Report
from murwren_e2e.runner import ScenarioRunner
from murwren_e2e.server import serve_assets
from murwren_e2e.suites.loading import available_suites, load_suite_manifest

CONFIG_ENV_VAR = "MURWREN_E2E_CONFIG"

DriverFactory: TypeAlias = Callable[
    [BrowserConfig], AbstractAsyncContextManager[BrowserDriver]
]


def load_config(environ: Mapping[str, str] = os.environ) -> HarnessConfig:
    """Build the run configuration from the environment.

    The optional ``MURWREN_E2E_CONFIG`` variable holds a JSON document
    overriding the defaults, e.g. ``{"serve": true, "server": {"port": 9000}}``.
    """
    raw = environ.get(CONFIG_ENV_VAR, "").strip()
    if not raw:
        return HarnessConfig()
    return HarnessConfig.model_validate_json(raw)


def log_report(log: logging.Logger, report: Report) -> None:
    """Log the rendered summary of a report."""
    for line in report.render():
        log.info("%s", line)


async def run(
    suite_key: str,
    config: HarnessConfig,
    report: Report,
    driver_factory: DriverFactory = PlaywrightDriver.from_config,
) -> int:
    """Run a suite, recording into report, and return the exit code.

    The asset server (when the suite needs an HTTP origin) and the browser
    are released on every exit path, including exceptions.
    """
    log = logging.getLogger("murwren_e2e")

    log.info("Loading suite: %s", suite_key)
    manifest = load_suite_manifest(suite_key)
    report.title = manifest.title
    scenarios = manifest.scenarios(config)
    serve = manifest.serve if config.serve is None else config.serve

    log.info("=" * 60)
    log.info("%s", manifest.title)
    log.info("=" * 60)

    async with AsyncExitStack() as stack:
        if serve:
            handle = await stack.enter_async_context(serve_assets(config))
            entry_url = str(handle.base_url)
        else:
            entry_url = config.index_path.as_uri()

        driver = await stack.enter_async_context(driver_factory(config.browser))
        runner = ScenarioRunner(
            driver=driver,
            report=report,
            entry_url=entry_url,
            screenshot_dir=config.screenshot_dir,
            poll_interval=config.timeouts.poll_interval,
        )
        await runner.run(scenarios)

    return report.exit_code()


def run_suite(
    suite_key: str, driver_factory: DriverFactory = PlaywrightDriver.from_config
) -> int:
    """Run a suite configured from the environment and print its report.

    Setup failures (port in use, browser launch) and unexpected errors are
    logged and turn into exit code 1; the outcomes recorded until then are
    still reported.
    """
    log = logging.getLogger("murwren_e2e")
    report = Report()

    try:
        config = load_config()
        exit_code = asyncio.run(run(suite_key, config, report, driver_factory))
    except Exception as exc:
        log.error("Fatal error: %s", exc, exc_info=exc)
        exit_code = 1

    log_report(log, report)
    print(json.dumps(report.to_dict(), indent=2))

    return exit_code


def configure_logging() -> None:
    """Send log records to stderr."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run an end-to-end suite against the Edward R. Mur-Wren app"
    )
    parser.add_argument(
        "suite",
        choices=available_suites(),
        help="Suite key (configure with the MURWREN_E2E_CONFIG JSON variable)",
    )

    args = parser.parse_args()

    configure_logging()
    sys.exit(run_suite(args.suite))


def _suite_entry_point(suite_key: str) -> Callable[[], None]:
    def entry_point() -> None:
        configure_logging()
        sys.exit(run_suite(suite_key))

    entry_point.__doc__ = f"Run the {suite_key} suite."
    return entry_point


full_suite = _suite_entry_point("full-suite")
serve_and_test = _suite_entry_point("serve-and-test")
upload_test = _suite_entry_point("upload")
og_image = _suite_entry_point("og-image")


if __name__ == "__main__":  # pragma: no cover
    main()
