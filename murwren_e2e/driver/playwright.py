"""Playwright implementation of the browser driver."""

import logging
from collections.abc import AsyncGenerator, Iterator
from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    ConsoleMessage,
    Page,
    async_playwright,
)
from playwright.async_api import Error as PlaywrightError

from murwren_e2e.driver.base import BrowserDriver, Observer, PageSession, Viewport
from murwren_e2e.errors import DriverError
from murwren_e2e.models.config import BrowserConfig

log = logging.getLogger(__name__)


@contextmanager
def _translate_errors(step: str) -> Iterator[None]:
    """Re-raise Playwright failures of a step as DriverError."""
    try:
        yield
    except PlaywrightError as exc:
        raise DriverError(f"{step} failed: {exc.message}") from exc


@dataclass(frozen=True, kw_only=True)
class PlaywrightPage(PageSession):
    """Page session backed by a Playwright page in its own context."""

    context: BrowserContext = field(repr=False)
    page: Page = field(repr=False)

    async def goto(self, url: str) -> None:
        """Navigate and wait for network idle."""
        log.debug("goto %s", url)
        with _translate_errors(f"Navigation to {url}"):
            await self.page.goto(url, wait_until="networkidle")

    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the viewport."""
        with _translate_errors(f"Resize to {width}x{height}"):
            await self.page.set_viewport_size({"width": width, "height": height})

    async def click(self, selector: str) -> None:
        """Click an element."""
        log.debug("click %s", selector)
        with _translate_errors(f"Click on {selector!r}"):
            await self.page.click(selector)

    async def select(self, selector: str, value: str) -> None:
        """Select an option by value."""
        log.debug("select %s=%s", selector, value)
        with _translate_errors(f"Select {value!r} in {selector!r}"):
            await self.page.select_option(selector, value)

    async def upload_file(self, selector: str, path: Path) -> None:
        """Set the files of a file input."""
        log.debug("upload %s -> %s", path, selector)
        with _translate_errors(f"Upload of {path.name} to {selector!r}"):
            await self.page.set_input_files(selector, path)

    async def fill(self, selector: str, text: str) -> None:
        """Fill a text input."""
        with _translate_errors(f"Typing into {selector!r}"):
            await self.page.fill(selector, text)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate in page context and return a JSON-like value."""
        with _translate_errors("Evaluation"):
            return await self.page.evaluate(expression, arg)

    async def screenshot(self, path: Path, *, full_page: bool = False) -> Path:
        """Capture a PNG screenshot."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with _translate_errors(f"Screenshot to {path}"):
            await self.page.screenshot(path=path, full_page=full_page, type="png")
        log.info("Screenshot saved to %s", path)
        return path

    def add_console_observer(self, observer: Observer) -> None:
        """Forward console message texts to observer."""

        def _on_console(message: ConsoleMessage) -> None:
            observer(message.text)

        self.page.on("console", _on_console)

    def add_error_observer(self, observer: Observer) -> None:
        """Forward uncaught page error messages to observer."""

        def _on_error(error: PlaywrightError) -> None:
            observer(error.message)

        self.page.on("pageerror", _on_error)

    async def close(self) -> None:
        """Close the page together with its context."""
        with _translate_errors("Closing page"):
            await self.context.close()


@dataclass(frozen=True, kw_only=True)
class PlaywrightDriver(BrowserDriver):
    """Browser driver launching a Playwright browser."""

    config: BrowserConfig
    browser: Browser = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: BrowserConfig
    ) -> AsyncGenerator["PlaywrightDriver", None]:
        """Launch the browser and close it on exit.

        Raises:
            DriverError: If the browser cannot be launched

        """
        async with async_playwright() as playwright:
            engine = getattr(playwright, config.engine)
            log.info(
                "Launching %s (headless=%s, args=%s)",
                config.engine,
                config.headless,
                " ".join(config.args),
            )
            with _translate_errors(f"Launching {config.engine}"):
                browser = await engine.launch(
                    headless=config.headless, args=list(config.args)
                )
            try:
                yield cls(config=config, browser=browser)
            finally:
                await browser.close()
                log.info("Browser closed")

    async def new_page(self, viewport: Viewport) -> PlaywrightPage:
        """Open a page in a fresh context sized to viewport."""
        with _translate_errors("Opening page"):
            context = await self.browser.new_context(
                viewport={"width": viewport.width, "height": viewport.height},
                device_scale_factor=viewport.device_scale_factor,
            )
            context.set_default_timeout(self.config.step_timeout * 1000)
            page = await context.new_page()
        return PlaywrightPage(context=context, page=page)
