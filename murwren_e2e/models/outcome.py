"""Models for assertion outcomes."""

from dataclasses import dataclass
from typing import Self


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Result of a single named assertion.

    Skipped outcomes are informational: they never fail a run and are not
    counted in the pass/fail totals.
    """

    __test__ = False

    name: str
    passed: bool
    detail: str | None = None
    skipped: bool = False

    def __post_init__(self) -> None:
        if self.skipped and not self.passed:
            raise ValueError(f"Skipped outcome {self.name!r} cannot be failed")

    @classmethod
    def skip(cls, name: str, reason: str) -> Self:
        """Build an informational outcome for a skipped scenario or assertion."""
        return cls(name=name, passed=True, detail=reason, skipped=True)
