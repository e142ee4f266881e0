"""Suite manifest definition for the plugin system."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from murwren_e2e.models.config import HarnessConfig
from murwren_e2e.runner import Scenario


@dataclass(frozen=True, kw_only=True)
class SuiteManifest:
    """Manifest describing a suite plugin.

    The manifest names the suite, states whether the app must be served over
    HTTP rather than opened as a file URL, and builds the scenario list from
    the run configuration.
    """

    title: str
    scenarios: Callable[[HarnessConfig], Sequence[Scenario]]
    serve: bool = False
