"""FakePage simulating the Edward R. Mur-Wren app."""

from typing import Any

from murwren_e2e.presets import default_presets
from murwren_e2e.suites import app
from murwren_e2e.testing.fake_driver import FakePage

MOBILE_BREAKPOINT = 768

LABELS = {
    "hp": "hpLabel",
    "lp": "lpLabel",
    "delayMs": "delayLabel",
    "wet": "wetLabel",
    "fb": "fbLabel",
    "hiss": "hissLabel",
}


def _preset_values(name: str) -> dict[str, str]:
    expected = default_presets().get(name).expected.model_dump()
    return {
        app.PARAMETER_INPUTS[param]: f"{value:g}" for param, value in expected.items()
    }


def _load_sample(page: FakePage, value: str | None) -> None:
    if page.state["sample_loads"]:
        page.state["loaded"] = True
        page.state["load_text"] = "✓ Sample loaded"
    else:
        page.state["load_text"] = "✗ Failed to load"


def _upload(page: FakePage, value: str | None) -> None:
    page.state["loaded"] = page.state["sample_loads"]


def _select_preset(page: FakePage, value: str | None) -> None:
    assert value is not None
    page.state["preset"] = value
    if page.state["presets_apply"]:
        page.state["inputs"].update(_preset_values(value))


def _preview(page: FakePage, value: str | None) -> None:
    if page.state["loaded"]:
        page.state["playing"] = True


def _stop(page: FakePage, value: str | None) -> None:
    page.state["playing"] = False


def _render(page: FakePage, value: str | None) -> None:
    if not page.state["loaded"]:
        return
    page.state["renders"] += 1
    page.state["download_href"] = f"blob:null/{page.state['renders']}"
    page.state["download_text"] = "Download WAV"


def _set_input(page: FakePage, arg: Any) -> None:
    input_id, value = arg
    page.state["inputs"][input_id] = value
    page.state["labels"][LABELS[input_id]] = value


def _mobile(page: FakePage) -> bool:
    return page.viewport is not None and page.viewport.width < MOBILE_BREAKPOINT


def app_page(*, sample_loads: bool = True, presets_apply: bool = True) -> FakePage:
    """Build a FakePage behaving like the app.

    Args:
        sample_loads: Whether loading or uploading the sample succeeds
        presets_apply: Whether selecting a preset updates the sliders

    """
    page = FakePage(
        state={
            "sample_loads": sample_loads,
            "presets_apply": presets_apply,
            "loaded": False,
            "load_text": "Load Sample",
            "playing": False,
            "renders": 0,
            "download_href": "",
            "download_text": "",
            "preset": "raw",
            "inputs": _preset_values("raw"),
            "labels": {},
        },
        actions={
            app.LOAD_SAMPLE_BUTTON: _load_sample,
            app.FILE_INPUT: _upload,
            app.PRESET_SELECT: _select_preset,
            app.PREVIEW_BUTTON: _preview,
            app.STOP_BUTTON: _stop,
            app.RENDER_BUTTON: _render,
        },
    )
    state = page.state
    page.responses = {
        app.PAGE_READY: True,
        app.SAMPLE_LOAD_SETTLED: lambda p, arg: state["load_text"][0] in "✓✗",
        app.LOAD_BUTTON_TEXT: lambda p, arg: state["load_text"],
        app.PREVIEW_ENABLED: lambda p, arg: state["loaded"],
        app.RENDER_ENABLED: lambda p, arg: state["loaded"],
        app.STOP_ENABLED: lambda p, arg: state["playing"],
        app.STOP_DISABLED: lambda p, arg: not state["playing"],
        app.DOWNLOAD_HREF: lambda p, arg: state["download_href"],
        app.DOWNLOAD_READY: lambda p, arg: (
            state["download_text"] == "Download WAV"
            and state["download_href"] != arg
        ),
        app.DOWNLOAD_INFO: lambda p, arg: {
            "text": state["download_text"],
            "isBlob": state["download_href"].startswith("blob:"),
            "filename": f"murwren-{state['preset']}.wav",
        },
        app.PARAMETER_READBACK: lambda p, arg: {
            name: state["inputs"][input_id] for name, input_id in arg.items()
        },
        app.SET_INPUT: _set_input,
        app.LABEL_EQUALS: lambda p, arg: state["labels"].get(arg[0]) == arg[1],
        app.DESKTOP_LAYOUT: lambda p, arg: not _mobile(p),
        app.MOBILE_VIEW: lambda p, arg: {
            "mobileMessageVisible": _mobile(p),
            "mainContentHidden": _mobile(p),
            "text": "This vintage audio transformer needs a bigger screen.",
        },
        app.BRANDING: {
            "title": app.TITLE,
            "tagline": app.TAGLINE,
            "badge": app.BADGE,
            "subtitle": (
                "Turn any recording into nostalgic, old-timey broadcasts. "
                "It runs free in your browser."
            ),
        },
        app.CONTROLS: {
            "fileInput": True,
            "loadSampleBtn": True,
            "presetSelect": True,
            "sliders": True,
            "previewBtn": True,
            "stopBtn": True,
            "renderBtn": True,
            "downloadLink": True,
            "presetOptions": list(default_presets().names),
        },
        app.INITIAL_STATE: lambda p, arg: {
            "previewDisabled": not state["loaded"],
            "stopDisabled": not state["playing"],
            "renderDisabled": not state["loaded"],
            "downloadText": state["download_text"],
            "selectedPreset": state["preset"],
        },
        app.VISUAL_ELEMENTS: {
            "hasGradientBg": True,
            "containerBorderRadius": "16px",
            "containerBoxShadow": True,
            "hasFooter": True,
            "footerText": '"Good night, and good chirp."',
            "githubUrl": f"https://github.com/{app.GITHUB_REPO}",
        },
        app.FORM_STRUCTURE: {
            "legends": ["Audio File", "Preset", "Parameters"],
            "labelCount": 6,
        },
        app.ACCESSIBILITY: {
            "lang": "en",
            "title": app.TITLE,
            "hasMetaCharset": True,
            "hasViewport": True,
            "hasFavicon": True,
        },
        app.OG_RESTYLE: True,
    }
    return page
