"""
Retry decisions.

`decide` turns a failure into one of the `RetryDecision` variants. The
checks run in a fixed order: attempt budget, fixed non-retryable set,
policy whitelist, then a conservative stop for everything else.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..categories import NON_RETRYABLE_CATEGORIES, ErrorCategory
from .backoff import JitterSource, compute_delay
from .classifier import classify_error
from .config import RetryPolicy

logger = logging.getLogger(__name__)


class StopReason(str, Enum):
    """Why a retry loop stopped."""

    MAX_ATTEMPTS = "max_attempts"
    NON_RETRYABLE = "non_retryable"  # category in the fixed non-retryable set
    NOT_RETRYABLE = "not_retryable"  # category not listed by the policy


@dataclass(frozen=True)
class Stop:
    """Give up and surface the failure."""

    reason: StopReason
    category: ErrorCategory | None = None


@dataclass(frozen=True)
class Delay:
    """Retry after waiting `milliseconds`."""

    milliseconds: int
    category: ErrorCategory | None = None


@dataclass(frozen=True)
class Retry:
    """Retry immediately. Part of the result type; `decide` never returns it."""

    category: ErrorCategory | None = None


RetryDecision = Union[Stop, Delay, Retry]


def decide(
    error: Any,
    attempt: int,
    policy: RetryPolicy,
    *,
    jitter_source: JitterSource = random.random,
) -> RetryDecision:
    """
    Decide what to do after a failed attempt.

    Args:
        error: The failure value raised or returned by the operation
        attempt: One-based number of the attempt that failed
        policy: Retry policy
        jitter_source: Random source handed to the backoff calculation

    Returns:
        Stop or Delay
    """
    category = classify_error(error)

    if attempt >= policy.max_attempts:
        logger.debug("Attempt %d reached max_attempts=%d", attempt, policy.max_attempts)
        return Stop(StopReason.MAX_ATTEMPTS, category)

    if category in NON_RETRYABLE_CATEGORIES:
        return Stop(StopReason.NON_RETRYABLE, category)

    if policy.is_retryable(category):
        delay = compute_delay(attempt, policy, jitter_source=jitter_source)
        return Delay(delay, category)

    # Unlisted categories, temporary_failure included, are not retried.
    return Stop(StopReason.NOT_RETRYABLE, category)
