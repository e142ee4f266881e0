"""Abstract capability interface of the browser driver."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TypeAlias

Observer: TypeAlias = Callable[[str], None]


@dataclass(frozen=True, kw_only=True)
class Viewport:
    """Viewport dimensions a page session is created with."""

    width: int
    height: int
    device_scale_factor: float = 1.0


DESKTOP = Viewport(width=1920, height=1080)
MOBILE = Viewport(width=375, height=667)


class PageSession(ABC):
    """A single browser page driven by the scenario runner.

    Every method is a suspension point; implementations translate engine
    failures into ``DriverError``. Values returned by ``evaluate`` are plain
    data, never live references into the page.
    """

    @abstractmethod
    async def goto(self, url: str) -> None:
        """Navigate to url and wait until the network is idle."""

    @abstractmethod
    async def set_viewport(self, width: int, height: int) -> None:
        """Resize the page viewport."""

    @abstractmethod
    async def click(self, selector: str) -> None:
        """Click the element matching selector."""

    @abstractmethod
    async def select(self, selector: str, value: str) -> None:
        """Choose the <option> with the given value in a <select>."""

    @abstractmethod
    async def upload_file(self, selector: str, path: Path) -> None:
        """Attach a file to the <input type=file> matching selector."""

    @abstractmethod
    async def fill(self, selector: str, text: str) -> None:
        """Type text into the input matching selector."""

    @abstractmethod
    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript expression in the page and return its value."""

    @abstractmethod
    async def screenshot(self, path: Path, *, full_page: bool = False) -> Path:
        """Capture the page to an image file and return its path."""

    @abstractmethod
    def add_console_observer(self, observer: Observer) -> None:
        """Call observer with the text of every console message."""

    @abstractmethod
    def add_error_observer(self, observer: Observer) -> None:
        """Call observer with the message of every uncaught page error."""

    @abstractmethod
    async def close(self) -> None:
        """Close the page."""


class BrowserDriver(ABC):
    """A launched browser able to open page sessions."""

    @abstractmethod
    async def new_page(self, viewport: Viewport) -> PageSession:
        """Open a new page session with the given viewport."""
