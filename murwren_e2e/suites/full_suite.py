"""Comprehensive suite: layout, controls, presets, playback, rendering, a11y."""

from collections.abc import Sequence
from functools import partial

from murwren_e2e.driver.base import MOBILE
from murwren_e2e.models.config import HarnessConfig
from murwren_e2e.presets import default_presets
from murwren_e2e.runner import Scenario, ScenarioContext
from murwren_e2e.suites import app
from murwren_e2e.suites.manifest import SuiteManifest
from murwren_e2e.suites.steps import (
    SAMPLE_READY,
    check_preset,
    check_preview,
    check_render,
    load_sample,
    open_app,
    select_preset,
    set_control,
)


async def desktop_layout(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check the desktop layout and branding copy."""
    await open_app(ctx, config)
    session = ctx.session()

    ctx.check(
        "Main content visible on desktop", await session.evaluate(app.DESKTOP_LAYOUT)
    )

    branding = await session.evaluate(app.BRANDING)
    ctx.check(
        f'Title is "{app.TITLE}"',
        branding["title"] == app.TITLE,
        f'Got: "{branding["title"]}"',
    )
    ctx.check(
        "Tagline is correct",
        branding["tagline"] == app.TAGLINE,
        f'Got: "{branding["tagline"]}"',
    )
    ctx.check(
        f'Badge says "{app.BADGE}"',
        branding["badge"] == app.BADGE,
        f'Got: "{branding["badge"]}"',
    )
    ctx.check(
        'Subtitle mentions "nostalgic, old-timey broadcasts"',
        "nostalgic, old-timey broadcasts" in branding["subtitle"],
        f'Subtitle: "{branding["subtitle"]}"',
    )
    ctx.check(
        'Subtitle mentions "runs free in your browser"',
        "runs free in your browser" in branding["subtitle"],
    )

    await ctx.screenshot("test-desktop-full.png")


async def mobile_layout(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check that small screens get the mobile message instead of the app."""
    await ctx.open_session("mobile", MOBILE)
    await ctx.wait_for(app.PAGE_READY, timeout=config.timeouts.page_ready, key="mobile")

    view = await ctx.session("mobile").evaluate(app.MOBILE_VIEW)
    ctx.check("Mobile message visible on small screens", view["mobileMessageVisible"])
    ctx.check("Main content hidden on mobile", view["mainContentHidden"])
    ctx.check(
        'Mobile message mentions "vintage audio transformer"',
        "vintage audio transformer" in view["text"].lower(),
    )

    await ctx.screenshot("test-mobile-full.png", key="mobile")
    await ctx.close_session("mobile")


async def controls_present(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check that every control of the app is rendered."""
    await open_app(ctx, config)
    controls = await ctx.session().evaluate(app.CONTROLS)

    ctx.check("File input present", controls["fileInput"])
    ctx.check("Load Sample button present", controls["loadSampleBtn"])
    ctx.check("Preset selector present", controls["presetSelect"])
    ctx.check("All sliders present", controls["sliders"])
    ctx.check("Preview button present", controls["previewBtn"])
    ctx.check("Stop button present", controls["stopBtn"])
    ctx.check("Render button present", controls["renderBtn"])
    ctx.check("Download link present", controls["downloadLink"])

    expected = default_presets().names
    ctx.check(
        f"All {len(expected)} presets available",
        all(name in controls["presetOptions"] for name in expected),
        f"Found: {', '.join(controls['presetOptions'])}",
    )


async def initial_state(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check the transport state before any audio is loaded."""
    await open_app(ctx, config)
    state = await ctx.session().evaluate(app.INITIAL_STATE)

    ctx.check("Preview button initially disabled", state["previewDisabled"])
    ctx.check("Stop button initially disabled", state["stopDisabled"])
    ctx.check("Render button initially disabled", state["renderDisabled"])
    ctx.check("Download link initially empty", state["downloadText"] == "")
    ctx.check(
        'Default preset is "raw"',
        state["selectedPreset"] == "raw",
        f'Got: "{state["selectedPreset"]}"',
    )


async def preset_parameters(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Select every preset in table order and read its parameters back."""
    await open_app(ctx, config)
    for preset in default_presets().presets:
        await check_preset(ctx, preset, config.timeouts.preset_apply)


async def slider_controls(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Move sliders and check their value labels."""
    await open_app(ctx, config)
    await set_control(
        ctx,
        config,
        name="Delay slider updates label",
        input_id="delayMs",
        label_id="delayLabel",
        value="75",
    )
    await set_control(
        ctx,
        config,
        name="Wet mix slider updates label",
        input_id="wet",
        label_id="wetLabel",
        value="0.5",
    )


async def preview_playback(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Preview the loaded sample through the newsroom preset."""
    await open_app(ctx, config)
    await select_preset(
        ctx, default_presets().get("newsroom"), config.timeouts.preset_apply
    )
    await check_preview(ctx, config)


async def wav_rendering(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Render the loaded sample to a WAV download."""
    await open_app(ctx, config)
    await check_render(ctx, config, "Render completed successfully")


async def visual_design(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check the styling and footer of the page."""
    await open_app(ctx, config)
    visual = await ctx.session().evaluate(app.VISUAL_ELEMENTS)

    ctx.check("Body has gradient background", visual["hasGradientBg"])
    ctx.check(
        "Container has rounded corners", visual["containerBorderRadius"] != "0px"
    )
    ctx.check("Container has box shadow", visual["containerBoxShadow"])
    ctx.check("Footer exists", visual["hasFooter"])
    ctx.check(
        "Footer includes tagline", "Good night, and good chirp" in visual["footerText"]
    )
    ctx.check("GitHub link present", visual["githubUrl"] is not None)
    ctx.check(
        "GitHub link points to correct repo",
        app.GITHUB_REPO in (visual["githubUrl"] or ""),
        f"Link: {visual['githubUrl']}",
    )


async def form_structure(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check fieldsets and labels."""
    await open_app(ctx, config)
    form = await ctx.session().evaluate(app.FORM_STRUCTURE)

    ctx.check('Has "Audio File" fieldset', "Audio File" in form["legends"])
    ctx.check('Has "Preset" fieldset', "Preset" in form["legends"])
    ctx.check(
        "All parameter labels present",
        form["labelCount"] >= len(app.PARAMETER_INPUTS),
        f"Found {form['labelCount']} labels",
    )


async def accessibility(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Check document-level accessibility metadata."""
    await open_app(ctx, config)
    a11y = await ctx.session().evaluate(app.ACCESSIBILITY)

    ctx.check("HTML has lang attribute", a11y["lang"] is not None)
    ctx.check(
        "Document has title", a11y["title"] == app.TITLE, f'Got: "{a11y["title"]}"'
    )
    ctx.check("Has charset meta tag", a11y["hasMetaCharset"])
    ctx.check("Has viewport meta tag", a11y["hasViewport"])
    ctx.check("Has favicon", a11y["hasFavicon"])


async def final_state(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Capture the page as the suite left it."""
    await open_app(ctx, config)
    await ctx.screenshot("test-final-state.png")


def scenarios(config: HarnessConfig) -> Sequence[Scenario]:
    """Build the scenarios of the comprehensive suite."""
    return [
        Scenario(
            name="Desktop layout and branding",
            steps=partial(desktop_layout, config=config),
        ),
        Scenario(
            name="Mobile responsiveness", steps=partial(mobile_layout, config=config)
        ),
        Scenario(
            name="UI controls and elements",
            steps=partial(controls_present, config=config),
        ),
        Scenario(name="Initial state", steps=partial(initial_state, config=config)),
        Scenario(
            name="Load sample audio",
            steps=partial(load_sample, config=config),
            fixtures=[config.fixture_path],
        ),
        Scenario(
            name="Preset parameter changes",
            steps=partial(preset_parameters, config=config),
        ),
        Scenario(name="Slider controls", steps=partial(slider_controls, config=config)),
        Scenario(
            name="Preview playback",
            steps=partial(preview_playback, config=config),
            requires=[SAMPLE_READY],
        ),
        Scenario(
            name="WAV rendering",
            steps=partial(wav_rendering, config=config),
            requires=[SAMPLE_READY],
        ),
        Scenario(
            name="Visual design elements", steps=partial(visual_design, config=config)
        ),
        Scenario(name="Form structure", steps=partial(form_structure, config=config)),
        Scenario(name="Accessibility", steps=partial(accessibility, config=config)),
        Scenario(name="Final state", steps=partial(final_state, config=config)),
    ]


full_suite_manifest = SuiteManifest(
    title="Edward R. Mur-Wren - Comprehensive Test Suite",
    scenarios=scenarios,
)
