"""
Retry policy applied to an event after a failed delivery attempt.
"""

import random
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class RetryStrategy(str, Enum):
    """How long a requeued event waits before its next attempt."""

    # Next scheduler tick, i.e. the retry delay equals the tick interval.
    FIXED = "fixed"
    EXPONENTIAL = "exponential"


class RetryPolicy:
    """Bounded retry decision with an optional backoff schedule."""

    def __init__(
        self,
        max_retries: int = 3,
        strategy: RetryStrategy = RetryStrategy.FIXED,
        base_delay: float = 5.0,
        max_delay: float = 300.0,
        jitter: float = 0.25,
    ):
        self.max_retries = max_retries
        self.strategy = RetryStrategy(strategy)
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.jitter = jitter

    def should_retry(self, retry_count: int) -> bool:
        """
        Decide whether a failed event goes back to the queue.

        Args:
            retry_count: Failed attempts so far, already including the one
                that just failed

        Returns:
            True to requeue as pending, False to mark the event failed
        """
        return retry_count < self.max_retries

    def calculate_delay(self, retry_count: int) -> float:
        """Backoff delay in seconds before attempt ``retry_count + 1``."""
        if self.strategy == RetryStrategy.FIXED:
            return 0.0

        # Exponential backoff: base_delay * 2^(retry_count - 1)
        exponential_delay = self.base_delay * (2 ** max(retry_count - 1, 0))

        # Add jitter (+/- 25% random variation by default)
        spread = exponential_delay * self.jitter
        jittered_delay = exponential_delay + random.uniform(-spread, spread)

        return max(0.0, min(jittered_delay, self.max_delay))

    def next_attempt_at(
        self, retry_count: int, now: datetime
    ) -> Optional[datetime]:
        """Earliest time a requeued event may be picked up, None for next tick."""
        delay = self.calculate_delay(retry_count)
        if delay <= 0:
            return None
        return now + timedelta(seconds=delay)
