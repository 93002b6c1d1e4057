"""Wait strategy used between prediction polls."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedDelay:  # pylint: disable=too-few-public-methods
    """Sleep a constant number of milliseconds between attempts."""

    delay_ms: int = 1000

    def delay_seconds(self, attempt: int) -> float:  # pylint: disable=unused-argument
        return self.delay_ms / 1000.0


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt budget plus wait strategy.

    The policy keeps no counters; callers pass the attempt number, so one
    instance can be shared by any number of wait loops.

    Usage:
        policy = RetryPolicy(max_attempts=30, strategy=FixedDelay(500))
        policy.step(1)  # sleeps 0.5s
    """

    max_attempts: Optional[int] = None
    strategy: FixedDelay = FixedDelay()

    def exhausted(self, attempts: int) -> bool:
        """True once ``attempts`` polls have used up the budget.

        A ``max_attempts`` of None or below 1 never runs out.
        """
        if self.max_attempts is None or self.max_attempts < 1:
            return False
        return attempts >= self.max_attempts

    def step(self, attempt: int = 1) -> None:
        """Block the calling thread for the strategy's delay."""
        delay = self.strategy.delay_seconds(attempt)
        logger.debug("Retry attempt %d: sleeping %.3fs", attempt, delay)
        time.sleep(delay)


__all__ = ["FixedDelay", "RetryPolicy"]
