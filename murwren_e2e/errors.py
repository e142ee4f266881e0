"""Exceptions raised by the harness."""


class BindError(Exception):
    """Raised when the asset server cannot acquire its port."""


class WaitTimeoutError(TimeoutError):
    """Raised when a polled condition is not met before its deadline."""

    def __init__(
        self, elapsed: float, timeout: float, description: str | None = None
    ) -> None:
        self.elapsed = elapsed
        self.timeout = timeout
        self.description = description
        what = description or "Condition"
        super().__init__(
            f"{what} not met within {timeout:.2f}s (waited {elapsed:.2f}s)"
        )


class DriverError(Exception):
    """Raised when the browser driver fails to execute a step."""


class FixtureMissingError(Exception):
    """Raised when an input fixture required by a scenario is absent."""


class ScenarioSkipped(Exception):
    """Raised from a scenario to skip the rest of its dependent steps."""


class SuiteNotFoundError(Exception):
    """Raised when a suite is not found."""
