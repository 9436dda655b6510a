"""
LLM Retry - Retry Logic.

Error classification, exponential backoff with jitter, retry decisions and
the orchestration loop that ties them together.
"""

from .config import RetryPolicy, create_policy
from .classifier import classify_error
from .backoff import JITTER_FRACTION, compute_delay
from .decision import Delay, Retry, RetryDecision, Stop, StopReason, decide
from .events import RetryEvent, RetryEventKind
from .orchestrator import (
    RetryOrchestrator,
    run_with_retry,
    run_with_retry_sync,
    stream_with_retry,
    with_retry,
    async_with_retry,
)

__all__ = [
    "RetryPolicy",
    "create_policy",
    "classify_error",
    "JITTER_FRACTION",
    "compute_delay",
    "Delay",
    "Retry",
    "RetryDecision",
    "Stop",
    "StopReason",
    "decide",
    "RetryEvent",
    "RetryEventKind",
    "RetryOrchestrator",
    "run_with_retry",
    "run_with_retry_sync",
    "stream_with_retry",
    "with_retry",
    "async_with_retry",
]
