"""
LLM Retry - Exception Hierarchy.

Provider exceptions tagged with error categories, plus the errors raised by
the retry layer itself.
"""

from .base import (
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

__all__ = [
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
]
