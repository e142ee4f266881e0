"""Models for the audio preset table."""

from collections.abc import Mapping, Sequence

from pydantic import Field

from murwren_e2e.models.base import Model


class PresetParameters(Model):
    """Parameter values a preset binds to the app's controls."""

    hp: float = Field(..., description="High-pass cutoff (Hz)")
    lp: float = Field(..., description="Low-pass cutoff (Hz)")
    delay: float = Field(..., description="Slapback delay (ms)")
    wet: float = Field(..., description="Delay wet mix")
    fb: float = Field(..., description="Delay feedback")
    hiss: float = Field(..., description="Tape hiss level")

    def differences(self, actual: "PresetParameters") -> Mapping[str, tuple[float, float]]:
        """Return ``{name: (expected, actual)}`` for every mismatching value."""
        expected_values = self.model_dump()
        actual_values = actual.model_dump()
        return {
            name: (value, actual_values[name])
            for name, value in expected_values.items()
            if actual_values[name] != value
        }


class Preset(Model):
    """A named preset and the values selecting it must produce."""

    name: str = Field(..., description="Value of the preset <option>")
    expected: PresetParameters


class PresetTable(Model):
    """Preset table loaded from presets.yaml."""

    version: str = Field(..., description="Preset table schema version")
    presets: Sequence[Preset] = Field(default_factory=list)

    def get(self, name: str) -> Preset:
        """Return the preset with the given name."""
        for preset in self.presets:
            if preset.name == name:
                return preset
        raise KeyError(name)

    @property
    def names(self) -> Sequence[str]:
        """Preset names in table order."""
        return [preset.name for preset in self.presets]
