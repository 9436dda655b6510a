"""
Canonical error categories used by the retry decision layer.
"""

from enum import Enum
from typing import FrozenSet


class ErrorCategory(str, Enum):
    """Canonical categories every provider failure is classified into."""

    TIMEOUT = "timeout"
    CONNECTION_FAILED = "connection_failed"
    NETWORK_ERROR = "network_error"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    AUTHENTICATION_FAILED = "authentication_failed"
    INVALID_API_KEY = "invalid_api_key"
    QUOTA_EXCEEDED = "quota_exceeded"
    CONTENT_SIZE_LIMIT_EXCEEDED = "content_size_limit_exceeded"
    INVALID_CONFIGURATION = "invalid_configuration"
    UNSUPPORTED_PROVIDER = "unsupported_provider"
    TEMPORARY_FAILURE = "temporary_failure"  # catch-all


# Never retried, whatever a policy lists as retryable.
NON_RETRYABLE_CATEGORIES: FrozenSet[ErrorCategory] = frozenset(
    {
        ErrorCategory.AUTHENTICATION_FAILED,
        ErrorCategory.INVALID_API_KEY,
        ErrorCategory.QUOTA_EXCEEDED,
        ErrorCategory.CONTENT_SIZE_LIMIT_EXCEEDED,
        ErrorCategory.INVALID_CONFIGURATION,
        ErrorCategory.UNSUPPORTED_PROVIDER,
    }
)

DEFAULT_RETRYABLE_CATEGORIES: FrozenSet[ErrorCategory] = frozenset(
    {
        ErrorCategory.TIMEOUT,
        ErrorCategory.CONNECTION_FAILED,
        ErrorCategory.NETWORK_ERROR,
        ErrorCategory.RATE_LIMITED,
        ErrorCategory.SERVER_ERROR,
        ErrorCategory.TEMPORARY_FAILURE,
    }
)
