"""Base model for data loaded from preset files and page readbacks."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable model rejecting unknown keys, so typos in presets.yaml fail."""

    model_config = ConfigDict(frozen=True, extra="forbid")
