"""Configuration for a harness run."""

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_BROWSER_ARGS = (
    "--autoplay-policy=no-user-gesture-required",
    "--use-fake-ui-for-media-stream",
    "--use-fake-device-for-media-stream",
)


class ServerConfig(BaseModel):
    """Configuration for the local asset server."""

    host: str = "localhost"
    port: int = Field(default=8888, ge=0, le=65535)


class BrowserConfig(BaseModel):
    """Configuration for the browser driver."""

    engine: Literal["chromium", "firefox", "webkit"] = "chromium"
    headless: bool = True
    args: Sequence[str] = DEFAULT_BROWSER_ARGS
    # Default Playwright timeout for navigation and element actions
    step_timeout: float = Field(default=30.0, gt=0)


class TimeoutConfig(BaseModel):
    """Deadlines (seconds) for the condition waits of the suites."""

    page_ready: float = Field(default=10.0, gt=0)
    sample_load: float = Field(default=15.0, gt=0)
    playback: float = Field(default=5.0, gt=0)
    render: float = Field(default=15.0, gt=0)
    preset_apply: float = Field(default=2.0, gt=0)
    poll_interval: float = Field(default=0.05, gt=0, lt=0.1)


class HarnessConfig(BaseModel):
    """Top-level configuration for a suite run."""

    app_root: Path = Field(default_factory=Path.cwd)
    index: str = "index.html"
    fixture: str = "sample.mp3"
    screenshot_dir: Path = Path(".")
    # None keeps the suite's own choice between file:// and HTTP
    serve: bool | None = None
    server: ServerConfig = Field(default_factory=ServerConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)

    @property
    def index_path(self) -> Path:
        """Absolute path of the app's entry page."""
        return (self.app_root / self.index).resolve()

    @property
    def fixture_path(self) -> Path:
        """Absolute path of the sample media fixture."""
        return (self.app_root / self.fixture).resolve()

    def screenshot_path(self, name: str) -> Path:
        """Path a screenshot with the given file name is written to."""
        return self.screenshot_dir / name
