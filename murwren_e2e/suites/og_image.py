"""Open Graph image capture (1200x630 social preview card)."""

from collections.abc import Sequence
from functools import partial

from murwren_e2e.driver.base import Viewport
from murwren_e2e.models.config import HarnessConfig
from murwren_e2e.runner import Scenario, ScenarioContext
from murwren_e2e.suites import app
from murwren_e2e.suites.manifest import SuiteManifest

OG_VIEWPORT = Viewport(width=1200, height=630, device_scale_factor=2)
OG_IMAGE = "og-image.png"


async def capture_card(ctx: ScenarioContext, config: HarnessConfig) -> None:
    """Restyle the page for the card and capture the viewport."""
    await ctx.open_session("og", OG_VIEWPORT)
    await ctx.wait_for(app.PAGE_READY, timeout=config.timeouts.page_ready, key="og")

    session = ctx.session("og")
    ctx.check(
        "Page restyled for social card",
        await session.evaluate(app.OG_RESTYLE, app.OG_TITLE),
    )
    await ctx.settle(0.5, "layout after restyle")

    path = await ctx.screenshot(OG_IMAGE, key="og", full_page=False)
    ctx.check(
        f"{OG_IMAGE} created",
        path.is_file(),
        f"{OG_VIEWPORT.width}x{OG_VIEWPORT.height} at {path}",
    )
    await ctx.close_session("og")


def scenarios(config: HarnessConfig) -> Sequence[Scenario]:
    """Build the single capture scenario."""
    return [
        Scenario(name="Open Graph image", steps=partial(capture_card, config=config))
    ]


og_image_manifest = SuiteManifest(
    title="Edward R. Mur-Wren - Open Graph Image",
    scenarios=scenarios,
)
