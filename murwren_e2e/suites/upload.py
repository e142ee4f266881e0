"""Suite feeding the sample through the file input instead of Load Sample."""

from collections.abc import Sequence
from functools import partial

from murwren_e2e.models.config import HarnessConfig
from murwren_e2e.presets import default_presets
from murwren_e2e.runner import Scenario, ScenarioContext
from murwren_e2e.suites.manifest import SuiteManifest
from murwren_e2e.suites.steps import (
    SAMPLE_READY,
    check_preview,
    check_render,
    open_app,
    select_preset,
    set_control,
    upload_sample,
)

RENDER_PRESETS = ("newsroom", "oldtv", "oldtv_hiss")

# (parameter, slider id, label id, value)
CUSTOM_PARAMETERS = (
    ("HP", "hp", "hpLabel", "200"),
    ("LP", "lp", "lpLabel", "4000"),
    ("delay", "delayMs", "delayLabel", "100"),
    ("wet", "wet", "wetLabel", "0.4"),
    ("feedback", "fb", "fbLabel", "0.2"),
)

CUSTOM_SETTINGS = "custom-settings"


async def preview_playback(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Preview the uploaded sample through the newsroom preset."""
    await open_app(ctx, config)
    await select_preset(
        ctx, default_presets().get("newsroom"), config.timeouts.preset_apply
    )
    await check_preview(ctx, config)


async def preset_rendering(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Render the uploaded sample through each preset."""
    await open_app(ctx, config)
    presets = default_presets()
    for name in RENDER_PRESETS:
        await select_preset(ctx, presets.get(name), config.timeouts.preset_apply)
        await check_render(ctx, config, f'"{name}" rendered successfully')


async def custom_parameters(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Start from the raw preset and adjust every slider by hand."""
    await open_app(ctx, config)
    await select_preset(ctx, default_presets().get("raw"), config.timeouts.preset_apply)

    results = [
        await set_control(
            ctx,
            config,
            name=f"Custom {label} parameter updates label",
            input_id=input_id,
            label_id=label_id,
            value=value,
        )
        for label, input_id, label_id, value in CUSTOM_PARAMETERS
    ]
    if all(results):
        ctx.provide(CUSTOM_SETTINGS)


async def custom_preview(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Preview with the hand-tuned parameters."""
    await open_app(ctx, config)
    await check_preview(
        ctx,
        config,
        started="Preview works with custom parameters",
        stopped="Preview with custom parameters stops",
    )
    await ctx.screenshot("test-upload-complete.png")


def scenarios(config: HarnessConfig) -> Sequence[Scenario]:
    """Build the scenarios of the upload suite."""
    return [
        Scenario(
            name="File upload",
            steps=partial(upload_sample, config=config),
            fixtures=[config.fixture_path],
        ),
        Scenario(
            name="Preview playback",
            steps=partial(preview_playback, config=config),
            requires=[SAMPLE_READY],
        ),
        Scenario(
            name="Preset rendering",
            steps=partial(preset_rendering, config=config),
            requires=[SAMPLE_READY],
        ),
        Scenario(
            name="Custom parameters",
            steps=partial(custom_parameters, config=config),
        ),
        Scenario(
            name="Preview with custom parameters",
            steps=partial(custom_preview, config=config),
            requires=[SAMPLE_READY, CUSTOM_SETTINGS],
        ),
    ]


upload_manifest = SuiteManifest(
    title="Edward R. Mur-Wren - Upload Test Suite",
    scenarios=scenarios,
)
