"""Discovery of the suites registered under the package's entry points."""

import logging
from collections.abc import Sequence
from importlib.metadata import entry_points

from murwren_e2e.errors import SuiteNotFoundError
from murwren_e2e.suites.manifest import SuiteManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "murwren_e2e.suites"


def available_suites() -> Sequence[str]:
    """Return the keys of every registered suite, sorted."""
    return sorted({entry.name for entry in entry_points(group=ENTRY_POINT_GROUP)})


def load_suite_manifest(key: str) -> SuiteManifest:
    """Import the manifest registered under key.

    Raises:
        SuiteNotFoundError: If key is not registered or does not point at a
            SuiteManifest

    """
    matches = entry_points(group=ENTRY_POINT_GROUP, name=key)
    if not matches:
        raise SuiteNotFoundError(
            f"Suite '{key}' not found. Available suites: "
            f"{', '.join(available_suites())}"
        )

    [entry, *_] = matches
    manifest = entry.load()
    if not isinstance(manifest, SuiteManifest):
        raise SuiteNotFoundError(
            f"Suite '{key}' points at {entry.value}, which is not a suite manifest"
        )
    log.debug("Loaded suite %s from %s", key, entry.value)
    return manifest
