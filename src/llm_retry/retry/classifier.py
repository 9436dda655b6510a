"""
Error classification.

Maps arbitrary failure values (transport exceptions, HTTP status errors,
plain-text provider messages, category-tagged exceptions) onto
`ErrorCategory`. Each shape is an ordered predicate; the first one that
recognizes the error wins and unrecognized errors become
`ErrorCategory.TEMPORARY_FAILURE`. Supporting a new provider error shape
means adding a predicate, nothing else changes.
"""

import logging
import socket
from typing import Any, Callable, Mapping

import httpx

from ..categories import ErrorCategory

logger = logging.getLogger(__name__)

# Plain-text errors some providers surface instead of structured ones.
MESSAGE_CATEGORIES: Mapping[str, ErrorCategory] = {
    "connection timeout": ErrorCategory.TIMEOUT,
    "network error": ErrorCategory.NETWORK_ERROR,
    "rate limit exceeded": ErrorCategory.RATE_LIMITED,
    "server error": ErrorCategory.SERVER_ERROR,
    "authentication failed": ErrorCategory.AUTHENTICATION_FAILED,
    "invalid api key": ErrorCategory.INVALID_API_KEY,
    "quota exceeded": ErrorCategory.QUOTA_EXCEEDED,
    "content_size_limit_exceeded": ErrorCategory.CONTENT_SIZE_LIMIT_EXCEEDED,
}

Classifier = Callable[[Any], ErrorCategory | None]


def _classify_transport(error: Any) -> ErrorCategory | None:
    # Timeouts first: httpx.ConnectTimeout is also a transport error.
    if isinstance(error, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT
    if isinstance(error, (httpx.ConnectError, ConnectionError)):
        return ErrorCategory.CONNECTION_FAILED
    if isinstance(error, (httpx.TransportError, socket.gaierror)):
        return ErrorCategory.NETWORK_ERROR
    return None


def _status_code_of(error: Any) -> int | None:
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
    elif isinstance(error, Mapping):
        status = error.get("status", error.get("status_code"))
    else:
        status = getattr(error, "status_code", None)

    if isinstance(status, int) and not isinstance(status, bool):
        return status
    return None


def _classify_status(error: Any) -> ErrorCategory | None:
    status = _status_code_of(error)
    if status is None:
        return None
    if status == 429:
        return ErrorCategory.RATE_LIMITED
    if 500 <= status <= 599:
        return ErrorCategory.SERVER_ERROR
    if status in (401, 403):
        return ErrorCategory.AUTHENTICATION_FAILED
    if status == 402:
        return ErrorCategory.QUOTA_EXCEEDED
    return None


def _classify_message(error: Any) -> ErrorCategory | None:
    if isinstance(error, str):
        message = error
    elif isinstance(error, BaseException) and len(error.args) == 1 and isinstance(error.args[0], str):
        message = error.args[0]
    else:
        return None
    return MESSAGE_CATEGORIES.get(message)


def _classify_symbol(error: Any) -> ErrorCategory | None:
    if isinstance(error, ErrorCategory):
        return error
    category = getattr(error, "category", None)
    if isinstance(category, ErrorCategory):
        return category
    return None


CLASSIFIERS: tuple[Classifier, ...] = (
    _classify_transport,
    _classify_status,
    _classify_message,
    _classify_symbol,
)


def classify_error(error: Any) -> ErrorCategory:
    """
    Classify a failure value into its canonical category.

    Never raises: anything no predicate recognizes is a temporary failure.
    """
    for classifier in CLASSIFIERS:
        try:
            category = classifier(error)
        except Exception:
            logger.debug("Classifier %s failed on %r", classifier.__name__, error, exc_info=True)
            continue
        if category is not None:
            return category
    return ErrorCategory.TEMPORARY_FAILURE
