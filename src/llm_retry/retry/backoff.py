"""
Backoff delay calculation.
"""

import random
from typing import Callable

from .config import RetryPolicy

# Jitter spreads each delay over ±25% of its capped value.
JITTER_FRACTION = 0.25

JitterSource = Callable[[], float]


def compute_delay(
    attempt: int,
    policy: RetryPolicy,
    *,
    jitter_source: JitterSource = random.random,
) -> int:
    """
    Calculate the delay before retrying after a failed attempt.

    Args:
        attempt: One-based number of the attempt that just failed
        policy: Retry policy
        jitter_source: Returns a uniform value in [0, 1), redrawn per call

    Returns:
        Delay in milliseconds, never below policy.base_delay_ms
    """
    try:
        delay = policy.base_delay_ms * policy.backoff_factor ** (attempt - 1)
    except OverflowError:
        delay = float(policy.max_delay_ms) if policy.base_delay_ms else 0.0

    # Apply max delay cap
    delay = min(delay, policy.max_delay_ms)

    jitter_amount = delay * JITTER_FRACTION * (2 * jitter_source() - 1)

    return max(policy.base_delay_ms, round(delay + jitter_amount))
