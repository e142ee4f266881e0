"""Load the preset table from YAML."""

from functools import cache
from pathlib import Path

import yaml

from murwren_e2e.models.preset import PresetTable

DEFAULT_PRESETS_PATH = Path(__file__).with_name("presets.yaml")


def load_preset_table(path: Path) -> PresetTable:
    """Load and validate a preset table file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the file does not match the schema

    """
    data = yaml.safe_load(path.read_text())
    return PresetTable.model_validate(data)


@cache
def default_presets() -> PresetTable:
    """Return the preset table bundled with the package."""
    return load_preset_table(DEFAULT_PRESETS_PATH)
