"""Data models shared across the harness."""

from murwren_e2e.models.config import (
    BrowserConfig,
    HarnessConfig,
    ServerConfig,
    TimeoutConfig,
)
from murwren_e2e.models.outcome import TestOutcome
from murwren_e2e.models.preset import Preset, PresetParameters, PresetTable

__all__ = [
    "BrowserConfig",
    "HarnessConfig",
    "Preset",
    "PresetParameters",
    "PresetTable",
    "ServerConfig",
    "TestOutcome",
    "TimeoutConfig",
]
