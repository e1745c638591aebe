"""
Retry delay after failed cycles: bounded exponential backoff with jitter,
expressed as a tenacity wait strategy.

    jitter off: min(max_delay, base_delay * factor ** (n - 1))
    jitter on:  uniform(base_delay / 2, that same bound)

n is tenacity's attempt number within one retry run, i.e. the number of
consecutive failures. The live loop starts a new run after every
successful cycle, which resets the count.
"""

from __future__ import annotations

from tenacity import RetryCallState, wait_exponential, wait_random_exponential
from tenacity.wait import wait_base


class BackoffPolicy:
    def __init__(
        self,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        *,
        factor: float = 2.0,
        jitter: bool = True,
    ) -> None:
        if base_delay <= 0 or max_delay <= 0:
            raise ValueError("backoff delays must be positive")
        if factor < 1:
            raise ValueError("backoff factor must be >= 1")
        self.base_delay = base_delay
        self.max_delay = max(max_delay, base_delay)
        self.factor = factor
        self.jitter = jitter
        if jitter:
            self.wait: wait_base = wait_random_exponential(
                multiplier=base_delay, max=self.max_delay, exp_base=factor, min=base_delay / 2
            )
        else:
            self.wait = wait_exponential(multiplier=base_delay, max=self.max_delay, exp_base=factor)

    def delay(self, failures: int) -> float:
        """Wait before the next attempt after *failures* consecutive failures."""
        if failures <= 0:
            return 0.0
        state = RetryCallState(retry_object=None, fn=None, args=(), kwargs={})
        state.attempt_number = failures
        return self.wait(state)
