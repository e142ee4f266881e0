"""Bounded polling of asynchronous page state."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from murwren_e2e.errors import WaitTimeoutError

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.05


async def wait_until(
    predicate: Callable[[], Awaitable[object]],
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    description: str | None = None,
) -> float:
    """Poll a predicate until it returns a truthy value.

    The predicate is re-evaluated against live state on every iteration, so
    it must not close over a snapshot. A single evaluation is bounded by the
    time left before the deadline.

    Args:
        predicate: Coroutine function reading the current state
        timeout: Maximum wait time in seconds
        poll_interval: Seconds between evaluations
        description: What is being waited for, used in the timeout message

    Returns:
        Seconds elapsed until the predicate held

    Raises:
        WaitTimeoutError: If the predicate does not hold within timeout
        ValueError: If timeout or poll_interval is not positive

    """
    if timeout <= 0:
        raise ValueError("timeout must be positive")
    if poll_interval <= 0:
        raise ValueError("poll_interval must be positive")

    loop = asyncio.get_event_loop()
    start = loop.time()

    while True:
        elapsed = loop.time() - start
        # reported elapsed is never below timeout
        if elapsed >= timeout:
            raise WaitTimeoutError(elapsed, timeout, description)

        try:
            result = await asyncio.wait_for(predicate(), timeout=timeout - elapsed)
        except TimeoutError:
            # loop timers may fire marginally early; re-check the deadline
            result = None

        if result:
            return loop.time() - start

        remaining = timeout - (loop.time() - start)
        await asyncio.sleep(min(poll_interval, max(remaining, 0)))


async def settle(seconds: float, reason: str) -> None:
    """Sleep for a fixed time when no observable completion signal exists.

    This neither proves that the awaited work finished nor fails fast when
    it regresses; prefer ``wait_until`` whenever the page exposes a
    condition to poll.
    """
    log.debug("Fixed delay of %.2fs (%s)", seconds, reason)
    await asyncio.sleep(seconds)
