"""Scenario runner driving page sessions and recording assertion outcomes."""

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import NoReturn, TypeAlias

from murwren_e2e.driver.base import BrowserDriver, PageSession, Viewport
from murwren_e2e.errors import (
    DriverError,
    FixtureMissingError,
    ScenarioSkipped,
    WaitTimeoutError,
)
from murwren_e2e.models.outcome import TestOutcome
from murwren_e2e.report import Report
from murwren_e2e.waiter import DEFAULT_POLL_INTERVAL, settle, wait_until

log = logging.getLogger(__name__)
browser_log = logging.getLogger("murwren_e2e.browser")

IGNORED_CONSOLE_MARKERS = ("DevTools", "Autofill")

Steps: TypeAlias = Callable[["ScenarioContext"], Awaitable[None]]


@dataclass(frozen=True, kw_only=True)
class Scenario:
    """An ordered group of interaction steps and their assertions.

    A scenario only runs when every fixture exists and every flag in
    ``requires`` was provided by an earlier scenario; otherwise a single
    skipped outcome is recorded in its place.
    """

    name: str
    steps: Steps
    fixtures: Sequence[Path] = ()
    requires: Sequence[str] = ()


def require_fixture(path: Path) -> Path:
    """Return path if the fixture exists, raise FixtureMissingError otherwise."""
    if not path.is_file():
        raise FixtureMissingError(f"{path.name} not found at {path}")
    return path


def _log_console(key: str, text: str) -> None:
    if any(marker in text for marker in IGNORED_CONSOLE_MARKERS):
        return
    browser_log.info("[%s] %s", key, text)


def _log_page_error(key: str, message: str) -> None:
    browser_log.error("[%s] page error: %s", key, message)


@dataclass(frozen=True, kw_only=True)
class ScenarioContext:
    """Step and assertion API handed to a running scenario."""

    scenario: Scenario
    runner: "ScenarioRunner"

    @property
    def entry_url(self) -> str:
        """URL of the app's entry page."""
        return self.runner.entry_url

    def check(self, name: str, passed: object, detail: str | None = None) -> bool:
        """Record a named assertion and return whether it passed."""
        result = bool(passed)
        self.runner.report.record(TestOutcome(name=name, passed=result, detail=detail))
        return result

    def session(self, key: str = "desktop") -> PageSession:
        """Return an open page session."""
        try:
            return self.runner.sessions[key]
        except KeyError:
            raise DriverError(f"No open page session {key!r}") from None

    async def open_session(
        self, key: str, viewport: Viewport, *, url: str | None = None
    ) -> PageSession:
        """Open a page session and navigate it to url (default: entry page)."""
        session = await self.runner.open_session(key, viewport)
        await session.goto(url or self.entry_url)
        return session

    async def ensure_session(
        self, key: str, viewport: Viewport, *, url: str | None = None
    ) -> PageSession:
        """Return the session under key, opening it first if needed."""
        if key in self.runner.sessions:
            return self.runner.sessions[key]
        return await self.open_session(key, viewport, url=url)

    async def close_session(self, key: str) -> None:
        """Close a page session."""
        await self.runner.close_session(key)

    async def wait_for(
        self,
        expression: str,
        *,
        timeout: float,
        key: str = "desktop",
        arg: object = None,
    ) -> float:
        """Wait until a page expression is truthy.

        Returns:
            Seconds waited

        Raises:
            WaitTimeoutError: If the expression stays falsy until timeout

        """
        session = self.session(key)
        return await wait_until(
            partial(session.evaluate, expression, arg),
            timeout,
            poll_interval=self.runner.poll_interval,
            description=f"[{self.scenario.name}] page condition",
        )

    async def poll(
        self, predicate: Callable[[], Awaitable[object]], *, timeout: float
    ) -> float:
        """Wait until an arbitrary async predicate holds."""
        return await wait_until(
            predicate,
            timeout,
            poll_interval=self.runner.poll_interval,
            description=f"[{self.scenario.name}] condition",
        )

    async def check_wait(
        self,
        name: str,
        expression: str,
        *,
        timeout: float,
        key: str = "desktop",
        arg: object = None,
    ) -> bool:
        """Record whether a page expression became truthy within timeout."""
        try:
            elapsed = await self.wait_for(expression, timeout=timeout, key=key, arg=arg)
        except WaitTimeoutError as exc:
            return self.check(
                name, False, f"Timed out after {exc.elapsed:.2f}s (limit {timeout}s)"
            )
        return self.check(name, True, f"Took {elapsed:.2f}s")

    async def settle(self, seconds: float, reason: str) -> None:
        """Fixed delay for settling that cannot be observed."""
        await settle(seconds, reason)

    async def screenshot(
        self, filename: str, *, key: str = "desktop", full_page: bool = True
    ) -> Path:
        """Capture a session into the screenshot directory."""
        path = self.runner.screenshot_dir / filename
        return await self.session(key).screenshot(path, full_page=full_page)

    def provide(self, flag: str) -> None:
        """Mark a prerequisite as met for later scenarios."""
        self.runner.provided.add(flag)

    def skip_check(self, name: str, reason: str) -> None:
        """Record a named assertion as skipped without stopping the scenario."""
        self.runner.report.record(TestOutcome.skip(name, reason))

    def skip(self, reason: str) -> NoReturn:
        """Stop the scenario and record it as skipped."""
        raise ScenarioSkipped(reason)


@dataclass(kw_only=True)
class ScenarioRunner:
    """Runs scenarios sequentially against the sessions of one browser."""

    driver: BrowserDriver
    report: Report
    entry_url: str
    screenshot_dir: Path = Path(".")
    poll_interval: float = DEFAULT_POLL_INTERVAL
    sessions: dict[str, PageSession] = field(default_factory=dict)
    provided: set[str] = field(default_factory=set)

    async def run(self, scenarios: Sequence[Scenario]) -> Report:
        """Run scenarios in order and close every session afterwards.

        Args:
            scenarios: Scenarios in execution order

        Returns:
            The report the outcomes were recorded into

        """
        if not scenarios:
            log.info("No scenarios provided")
            return self.report

        log.info("Running %d scenario(s)...", len(scenarios))
        try:
            for scenario in scenarios:
                await self.run_scenario(scenario)
        finally:
            await self.close_sessions()
        log.info("Scenario execution completed")

        return self.report

    async def run_scenario(self, scenario: Scenario) -> None:
        """Run one scenario, converting its failures into outcomes."""
        log.info("Scenario: %s", scenario.name)

        missing = [flag for flag in scenario.requires if flag not in self.provided]
        if missing:
            self._skip(scenario, f"Prerequisite not met: {', '.join(missing)}")
            return

        context = ScenarioContext(scenario=scenario, runner=self)
        try:
            for fixture in scenario.fixtures:
                require_fixture(fixture)
            await scenario.steps(context)
        except (FixtureMissingError, ScenarioSkipped) as exc:
            self._skip(scenario, str(exc))
        except WaitTimeoutError as exc:
            self._abort(scenario, f"Wait timed out: {exc}")
        except DriverError as exc:
            self._abort(scenario, f"Step failed: {exc}")
        except Exception as exc:
            log.error("Scenario %s raised: %s", scenario.name, exc, exc_info=exc)
            self._abort(scenario, f"Unexpected error: {exc!r}")

    async def open_session(self, key: str, viewport: Viewport) -> PageSession:
        """Open a page session and attach console logging."""
        if key in self.sessions:
            raise DriverError(f"Page session {key!r} is already open")

        log.info(
            "Opening %s session (%dx%d)", key, viewport.width, viewport.height
        )
        session = await self.driver.new_page(viewport)
        session.add_console_observer(partial(_log_console, key))
        session.add_error_observer(partial(_log_page_error, key))
        self.sessions[key] = session
        return session

    async def close_session(self, key: str) -> None:
        """Close and forget a page session."""
        session = self.sessions.pop(key, None)
        if session is not None:
            await session.close()

    async def close_sessions(self) -> None:
        """Close every open session, logging failures."""
        for key in list(self.sessions):
            try:
                await self.close_session(key)
            except DriverError as exc:
                log.warning("Failed to close %s session: %s", key, exc)

    def _skip(self, scenario: Scenario, reason: str) -> None:
        log.info("Skipping %s: %s", scenario.name, reason)
        self.report.record(TestOutcome.skip(scenario.name, reason))

    def _abort(self, scenario: Scenario, detail: str) -> None:
        self.report.record(
            TestOutcome(name=f"{scenario.name} (aborted)", passed=False, detail=detail)
        )
