"""Fixtures for running suites against the simulated app."""

from collections.abc import Callable
from pathlib import Path

import pytest

from murwren_e2e.models.config import HarnessConfig, TimeoutConfig
from murwren_e2e.report import Report
from murwren_e2e.runner import ScenarioRunner
from murwren_e2e.testing.fake_driver import FakeDriver


@pytest.fixture
def config(tmp_path: Path) -> HarnessConfig:
    """Create a config with a sample fixture and short deadlines."""
    (tmp_path / "index.html").write_text("<!doctype html>")
    (tmp_path / "sample.mp3").write_bytes(b"ID3")
    return HarnessConfig(
        app_root=tmp_path,
        screenshot_dir=tmp_path / "shots",
        timeouts=TimeoutConfig(
            page_ready=0.2,
            sample_load=0.2,
            playback=0.2,
            render=0.2,
            preset_apply=0.2,
            poll_interval=0.01,
        ),
    )


@pytest.fixture
def make_runner(config: HarnessConfig) -> Callable[[FakeDriver], ScenarioRunner]:
    """Return a builder of runners using the config's polling interval."""

    def build(driver: FakeDriver) -> ScenarioRunner:
        return ScenarioRunner(
            driver=driver,
            report=Report(),
            entry_url=config.index_path.as_uri(),
            screenshot_dir=config.screenshot_dir,
            poll_interval=config.timeouts.poll_interval,
        )

    return build
