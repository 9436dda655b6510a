"""
LLM Retry - Retry and backoff decisions for remote provider calls.

Classifies provider failures, computes jittered exponential backoff and
drives retried (optionally streaming) operations.
"""

from .categories import ErrorCategory, NON_RETRYABLE_CATEGORIES, DEFAULT_RETRYABLE_CATEGORIES
from .exceptions import (
    ProviderError,
    ProviderTimeoutError,
    ProviderConnectionError,
    NetworkError,
    RateLimitError,
    ServerError,
    AuthenticationError,
    InvalidAPIKeyError,
    QuotaExceededError,
    ContentSizeLimitError,
    UnsupportedProviderError,
    InvalidPolicyError,
    RetryCancelledError,
)
from .retry import (
    RetryPolicy,
    create_policy,
    classify_error,
    compute_delay,
    Delay,
    Retry,
    RetryDecision,
    Stop,
    StopReason,
    decide,
    RetryEvent,
    RetryEventKind,
    RetryOrchestrator,
    run_with_retry,
    run_with_retry_sync,
    stream_with_retry,
    with_retry,
    async_with_retry,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Categories
    "ErrorCategory",
    "NON_RETRYABLE_CATEGORIES",
    "DEFAULT_RETRYABLE_CATEGORIES",
    # Exceptions
    "ProviderError",
    "ProviderTimeoutError",
    "ProviderConnectionError",
    "NetworkError",
    "RateLimitError",
    "ServerError",
    "AuthenticationError",
    "InvalidAPIKeyError",
    "QuotaExceededError",
    "ContentSizeLimitError",
    "UnsupportedProviderError",
    "InvalidPolicyError",
    "RetryCancelledError",
    # Retry
    "RetryPolicy",
    "create_policy",
    "classify_error",
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
