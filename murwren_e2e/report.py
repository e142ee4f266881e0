"""Accumulation and rendering of assertion outcomes."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from murwren_e2e.models.outcome import TestOutcome

log = logging.getLogger("murwren_e2e")

STATUS_SYMBOLS = {
    "passed": "✅",
    "failed": "❌",
    "skipped": "⏭️",
}
RULE = "=" * 60


def status_of(outcome: TestOutcome) -> str:
    """Return the display status of an outcome."""
    if outcome.skipped:
        return "skipped"
    return "passed" if outcome.passed else "failed"


def format_outcome(outcome: TestOutcome) -> list[str]:
    """Format an outcome as a marker line plus its indented detail."""
    status = status_of(outcome)
    lines = [f"{STATUS_SYMBOLS[status]} {outcome.name}"]
    if outcome.detail and status != "passed":
        lines.append(f"   {outcome.detail}")
    return lines


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Counts derived from the outcomes of a run."""

    passed: int
    failed: int
    skipped: int = 0

    @property
    def total(self) -> int:
        """Number of pass/fail outcomes; skipped ones are informational."""
        return self.passed + self.failed

    @property
    def success_rate(self) -> float | None:
        """Fraction of passed outcomes, None when nothing was asserted."""
        if self.total == 0:
            return None
        return self.passed / self.total


@dataclass(kw_only=True)
class Report:
    """Ordered record of the outcomes of one run."""

    title: str = "Test Suite"
    _outcomes: list[TestOutcome] = field(
        default_factory=list, init=False, repr=False
    )

    @property
    def outcomes(self) -> Sequence[TestOutcome]:
        """Outcomes in the order they were recorded."""
        return tuple(self._outcomes)

    def record(self, outcome: TestOutcome) -> None:
        """Append an outcome and log it."""
        self._outcomes.append(outcome)
        for line in format_outcome(outcome):
            log.info("  %s", line)

    def summarize(self) -> RunSummary:
        """Recompute the counts from the recorded outcomes."""
        passed = sum(1 for o in self._outcomes if o.passed and not o.skipped)
        failed = sum(1 for o in self._outcomes if not o.passed)
        skipped = sum(1 for o in self._outcomes if o.skipped)
        return RunSummary(
            passed=passed,
            failed=failed,
            skipped=skipped,
        )

    def exit_code(self) -> int:
        """Return 1 if any outcome failed, 0 otherwise."""
        return 1 if any(not outcome.passed for outcome in self._outcomes) else 0

    def render(self) -> list[str]:
        """Render the human-readable summary."""
        summary = self.summarize()
        lines = [RULE, f"TEST SUMMARY: {self.title}", RULE]
        for outcome in self._outcomes:
            lines.extend(format_outcome(outcome))
        lines.append(RULE)

        failures = [outcome for outcome in self._outcomes if not outcome.passed]
        if failures:
            lines.append("Failed Tests:")
            for outcome in failures:
                lines.extend(f"  {line}" for line in format_outcome(outcome))
            lines.append(RULE)

        lines.append(f"{STATUS_SYMBOLS['passed']} Tests Passed: {summary.passed}")
        lines.append(f"{STATUS_SYMBOLS['failed']} Tests Failed: {summary.failed}")
        if summary.skipped:
            lines.append(
                f"{STATUS_SYMBOLS['skipped']} Groups Skipped: {summary.skipped}"
            )
        lines.append(f"Total Tests: {summary.total}")
        if summary.success_rate is not None:
            lines.append(f"Success Rate: {summary.success_rate:.0%}")
        lines.append(RULE)
        return lines

    def to_dict(self) -> dict[str, Any]:
        """Format the run for JSON output."""
        summary = self.summarize()
        return {
            "title": self.title,
            "total": summary.total,
            "passed": summary.passed,
            "failed": summary.failed,
            "skipped": summary.skipped,
            "success_rate": summary.success_rate,
            "results": [
                {
                    "name": outcome.name,
                    "status": status_of(outcome),
                    "detail": outcome.detail,
                }
                for outcome in self._outcomes
            ],
        }
