"""Scenario steps shared by the suites."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from murwren_e2e.driver.base import DESKTOP
from murwren_e2e.errors import WaitTimeoutError
from murwren_e2e.models.config import HarnessConfig
from murwren_e2e.models.preset import Preset, PresetParameters
from murwren_e2e.runner import ScenarioContext
from murwren_e2e.suites import app

log = logging.getLogger(__name__)

# Provided once a sample is decoded and the transport buttons are enabled
SAMPLE_READY = "sample-ready"

SAMPLE_LOADED = "Sample loaded successfully"
PREVIEW_AFTER_LOAD = "Preview button enabled after load"
RENDER_AFTER_LOAD = "Render button enabled after load"
LOAD_DEPENDENT_CHECKS = (SAMPLE_LOADED, PREVIEW_AFTER_LOAD, RENDER_AFTER_LOAD)


async def open_app(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Open the desktop session on first use and wait for the document."""
    await ctx.ensure_session("desktop", DESKTOP)
    await ctx.wait_for(app.PAGE_READY, timeout=config.timeouts.page_ready)


async def load_sample(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Load the bundled sample through the app's Load Sample button."""
    await open_app(ctx, config)
    ctx.check(
        "Sample file exists", config.fixture_path.is_file(), str(config.fixture_path)
    )

    session = ctx.session()
    await session.click(app.LOAD_SAMPLE_BUTTON)
    settled = await ctx.check_wait(
        "Sample load finished",
        app.SAMPLE_LOAD_SETTLED,
        timeout=config.timeouts.sample_load,
    )
    if not settled:
        for name in LOAD_DEPENDENT_CHECKS:
            ctx.skip_check(name, "Sample load did not finish")
        return

    text = await session.evaluate(app.LOAD_BUTTON_TEXT)
    loaded = ctx.check(SAMPLE_LOADED, "✓" in text, f'Button text: "{text}"')
    preview = await ctx.check_wait(
        PREVIEW_AFTER_LOAD,
        app.PREVIEW_ENABLED,
        timeout=config.timeouts.playback,
    )
    render = await ctx.check_wait(
        RENDER_AFTER_LOAD,
        app.RENDER_ENABLED,
        timeout=config.timeouts.playback,
    )
    if loaded and preview and render:
        ctx.provide(SAMPLE_READY)


async def upload_sample(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Attach the sample to the file input."""
    await open_app(ctx, config)
    ctx.check(
        "Sample file exists", config.fixture_path.is_file(), str(config.fixture_path)
    )

    await ctx.session().upload_file(app.FILE_INPUT, config.fixture_path)
    preview = await ctx.check_wait(
        "Preview button enabled after upload",
        app.PREVIEW_ENABLED,
        timeout=config.timeouts.sample_load,
    )
    render = await ctx.check_wait(
        "Render button enabled after upload",
        app.RENDER_ENABLED,
        timeout=config.timeouts.sample_load,
    )
    if preview and render:
        ctx.provide(SAMPLE_READY)


def parse_parameters(readback: Mapping[str, Any]) -> PresetParameters | None:
    """Convert slider values read from the page, None if any is not numeric."""
    try:
        return PresetParameters.model_validate(readback)
    except ValidationError:
        return None


async def read_parameters(ctx: ScenarioContext) -> Mapping[str, Any]:
    """Read the raw slider values bound to the preset parameters."""
    readback: Mapping[str, Any] = await ctx.session().evaluate(
        app.PARAMETER_READBACK, app.PARAMETER_INPUTS
    )
    return readback


async def select_preset(
    ctx: ScenarioContext, preset: Preset, timeout: float
) -> Mapping[str, Any]:
    """Select a preset and wait until the sliders carry its values.

    Returns:
        The last slider values read

    Raises:
        WaitTimeoutError: If the values do not match within timeout

    """
    await ctx.session().select(app.PRESET_SELECT, preset.name)
    last: Mapping[str, Any] = {}

    async def applied() -> bool:
        nonlocal last
        last = await read_parameters(ctx)
        return parse_parameters(last) == preset.expected

    try:
        await ctx.poll(applied, timeout=timeout)
    except WaitTimeoutError as exc:
        exc.add_note(f"Last values: {dict(last)}")
        raise
    return last


async def check_preset(ctx: ScenarioContext, preset: Preset, timeout: float) -> bool:
    """Record whether selecting a preset applies exactly its table values."""
    name = f'Preset "{preset.name}" applies correct values'
    try:
        await select_preset(ctx, preset, timeout)
    except WaitTimeoutError:
        readback = await read_parameters(ctx)
        actual = parse_parameters(readback)
        if actual is None:
            return ctx.check(name, False, f"Non-numeric values: {dict(readback)}")
        mismatches = ", ".join(
            f"{field}: expected {expected:g}, got {got:g}"
            for field, (expected, got) in preset.expected.differences(actual).items()
        )
        return ctx.check(name, False, mismatches)
    return ctx.check(name, True)


async def check_preview(
    ctx: ScenarioContext,
    config: HarnessConfig,
    *,
    started: str = "Stop button enabled during preview",
    stopped: str = "Stop button disabled after stopping",
) -> bool:
    """Start and stop a preview, recording both transitions."""
    session = ctx.session()
    await session.click(app.PREVIEW_BUTTON)
    playing = await ctx.check_wait(
        started, app.STOP_ENABLED, timeout=config.timeouts.playback
    )
    if not playing:
        ctx.skip_check(stopped, "Preview never started")
        return False

    await session.click(app.STOP_BUTTON)
    return await ctx.check_wait(
        stopped, app.STOP_DISABLED, timeout=config.timeouts.playback
    )


async def check_render(ctx: ScenarioContext, config: HarnessConfig, name: str) -> bool:
    """Render the current settings to WAV and inspect the download link."""
    session = ctx.session()
    previous = await session.evaluate(app.DOWNLOAD_HREF)
    await session.click(app.RENDER_BUTTON)
    ready = await ctx.check_wait(
        name, app.DOWNLOAD_READY, timeout=config.timeouts.render, arg=previous
    )
    blob_check = f"{name}: download link has blob URL"
    filename_check = f"{name}: download attribute set"
    if not ready:
        ctx.skip_check(blob_check, "Render did not finish")
        ctx.skip_check(filename_check, "Render did not finish")
        return False

    info = await session.evaluate(app.DOWNLOAD_INFO)
    ctx.check(blob_check, info["isBlob"], info["text"])
    return ctx.check(
        filename_check,
        info["filename"],
        f"Filename: {info['filename']}",
    )


async def set_control(
    ctx: ScenarioContext,
    config: HarnessConfig,
    *,
    name: str,
    input_id: str,
    label_id: str,
    value: str,
) -> bool:
    """Move a slider and record whether its label follows."""
    await ctx.session().evaluate(app.SET_INPUT, [input_id, value])
    return await ctx.check_wait(
        name,
        app.LABEL_EQUALS,
        timeout=config.timeouts.preset_apply,
        arg=[label_id, value],
    )
