"""Retry behaviour shared by the channel delivery tasks."""

from __future__ import annotations

import math

from notifyhub.config import get_settings


class RetryPolicy:
    """Attempt cap and exponential backoff for delivery jobs."""

    def __init__(
        self,
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        backoff_multiplier: float = 2.0,
        max_delay: float = 60.0,
    ):
        self.max_attempts = max_attempts
        self.initial_delay = initial_delay
        self.backoff_multiplier = backoff_multiplier
        self.max_delay = max_delay

    @classmethod
    def from_settings(cls) -> "RetryPolicy":
        settings = get_settings()
        return cls(
            max_attempts=settings.queue_max_attempts,
            initial_delay=settings.queue_backoff_seconds,
        )

    def calculate_delay(self, attempt: int) -> float:
        """Return the wait before the attempt following ``attempt``.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The delay in seconds, capped at ``max_delay``.
        """
        if attempt < 1:
            return self.initial_delay

        delay = self.initial_delay * math.pow(self.backoff_multiplier, attempt - 1)
        return min(delay, self.max_delay)

    def should_retry(self, attempt: int) -> bool:
        return attempt < self.max_attempts


__all__ = ["RetryPolicy"]
