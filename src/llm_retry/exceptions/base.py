"""
Exception classes for provider operations and the retry layer.

Provider exceptions carry an `ErrorCategory` so the classifier can map them
without inspecting messages. `retryable` reports whether the category is
outside the fixed non-retryable set; whether a retry actually happens is up
to the active `RetryPolicy`.
"""

from ..categories import NON_RETRYABLE_CATEGORIES, ErrorCategory


class ProviderError(Exception):
    """Base exception for all provider operation errors."""

    category: ErrorCategory = ErrorCategory.TEMPORARY_FAILURE

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        provider: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.provider = provider

    @property
    def retryable(self) -> bool:
        return self.category not in NON_RETRYABLE_CATEGORIES

    def __str__(self) -> str:
        parts = [self.message]
        if self.provider:
            parts.insert(0, f"[{self.provider}]")
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        return " ".join(parts)


class ProviderTimeoutError(ProviderError):
    """Raised when a request times out."""

    category = ErrorCategory.TIMEOUT

    def __init__(self, message: str = "Request timed out", **kwargs):
        super().__init__(message, **kwargs)


class ProviderConnectionError(ProviderError):
    """Raised when the connection to the provider cannot be established."""

    category = ErrorCategory.CONNECTION_FAILED

    def __init__(self, message: str = "Connection failed", **kwargs):
        super().__init__(message, **kwargs)


class NetworkError(ProviderError):
    """Raised on network failures after a connection was made."""

    category = ErrorCategory.NETWORK_ERROR

    def __init__(self, message: str = "Network error", **kwargs):
        super().__init__(message, **kwargs)


class RateLimitError(ProviderError):
    """
    Raised when rate limit is exceeded.

    `retry_after` is informational for callers. The retry orchestrator does
    not read it; its waits always follow the policy backoff.
    """

    category = ErrorCategory.RATE_LIMITED

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        retry_after: float | None = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(ProviderError):
    """Raised when the provider returns a 5xx error."""

    category = ErrorCategory.SERVER_ERROR

    def __init__(self, message: str = "Server error", **kwargs):
        super().__init__(message, **kwargs)


class AuthenticationError(ProviderError):
    """Raised when authentication fails. Never retried."""

    category = ErrorCategory.AUTHENTICATION_FAILED

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(message, **kwargs)


class InvalidAPIKeyError(ProviderError):
    """Raised when the configured API key is rejected. Never retried."""

    category = ErrorCategory.INVALID_API_KEY

    def __init__(self, message: str = "Invalid API key", **kwargs):
        super().__init__(message, **kwargs)


class QuotaExceededError(ProviderError):
    """Raised when the account quota is used up. Never retried."""

    category = ErrorCategory.QUOTA_EXCEEDED

    def __init__(self, message: str = "Quota exceeded", **kwargs):
        super().__init__(message, **kwargs)


class ContentSizeLimitError(ProviderError):
    """Raised when the request content is larger than the provider accepts."""

    category = ErrorCategory.CONTENT_SIZE_LIMIT_EXCEEDED

    def __init__(self, message: str = "Content size limit exceeded", **kwargs):
        super().__init__(message, **kwargs)


class UnsupportedProviderError(ProviderError):
    """Raised when no adapter exists for the requested provider."""

    category = ErrorCategory.UNSUPPORTED_PROVIDER

    def __init__(self, message: str = "Unsupported provider", **kwargs):
        super().__init__(message, **kwargs)


class InvalidPolicyError(ValueError):
    """Raised by `create_policy` when overrides do not form a valid policy."""


class RetryCancelledError(BaseException):
    """
    Describes a retry loop cancelled while waiting between attempts.

    Raised directly by blocking runs when their `cancel_event` is set. Async
    runs re-raise the task's own `asyncio.CancelledError` unchanged, so
    `asyncio.timeout()` and task cancellation behave as usual, and attach
    this error as its `__cause__`.

    Derives from BaseException: `except Exception` handlers, retry loops
    included, let it pass.

    Attributes:
        last_error: The operation failure that scheduled the interrupted wait
        attempt: Attempt number of that failure (1-based)
    """

    def __init__(self, last_error: BaseException | None = None, attempt: int = 0):
        super().__init__(f"Retry cancelled while waiting after attempt {attempt}")
        self.last_error = last_error
        self.attempt = attempt
