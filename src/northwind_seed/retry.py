"""Bounded retry with exponential backoff for transient backend failures."""

import logging
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from northwind_seed.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """
    Retry BackendUnavailableError with exponential backoff and jitter.

    Any other exception (including BackendRejectedError) propagates on the
    first occurrence.

    Attributes:
        max_retries: Retries after the first attempt (0 disables retrying)
        retry_delay: Delay in seconds before the first retry
        backoff_factor: Multiplier applied to the delay after each retry
        jitter: Scale each delay by a random factor in [0.8, 1.2)
        sleep: Sleep function (replaceable in tests)
    """

    max_retries: int = 3
    retry_delay: float = 0.5
    backoff_factor: float = 2.0
    jitter: bool = True
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (1-based), without jitter."""
        return self.retry_delay * (self.backoff_factor ** (attempt - 1))

    def call(self, fn: Callable[[], T], description: str = "backend call") -> T:
        """
        Call fn, retrying transient backend failures.

        Raises:
            BackendUnavailableError: If every attempt failed
        """
        attempts = self.max_retries + 1
        for attempt in range(1, attempts):
            try:
                return fn()
            except BackendUnavailableError as exc:
                delay = self.delay_for(attempt)
                if self.jitter:
                    delay *= 0.8 + 0.4 * random.random()
                logger.warning(
                    f"{description}: attempt {attempt}/{attempts} failed "
                    f"({exc.detail}), retrying in {delay:.2f}s..."
                )
                self.sleep(delay)

        try:
            return fn()
        except BackendUnavailableError:
            logger.error(f"{description}: giving up after {attempts} attempt(s)")
            raise


NO_RETRY = RetryPolicy(max_retries=0)
