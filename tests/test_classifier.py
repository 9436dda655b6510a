"""Tests for error classification - behavior focused."""

import asyncio
import socket

import httpx
import pytest
from llm_retry.categories import ErrorCategory
from llm_retry.exceptions import (
    AuthenticationError,
    ContentSizeLimitError,
    InvalidAPIKeyError,
    ProviderError,
    RateLimitError,
    UnsupportedProviderError,
)
from llm_retry.retry import classify_error


def create_response(status_code: int, text: str = "") -> httpx.Response:
    """Create a response with a proper request object."""
    request = httpx.Request("POST", "http://test")
    return httpx.Response(status_code, text=text, request=request)


def create_status_error(status_code: int) -> httpx.HTTPStatusError:
    response = create_response(status_code)
    return httpx.HTTPStatusError(
        f"HTTP {status_code}", request=response.request, response=response
    )


class TestTransportErrors:
    """Test transport and timeout shapes."""

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ReadTimeout("timed out"),
            httpx.ConnectTimeout("connect timed out"),
            httpx.PoolTimeout("pool exhausted"),
            TimeoutError(),
            asyncio.TimeoutError(),
        ],
    )
    def test_timeouts(self, error):
        """Timeouts classify as timeout, including connect timeouts."""
        assert classify_error(error) is ErrorCategory.TIMEOUT

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("Connection refused"),
            ConnectionRefusedError(),
            ConnectionResetError(),
            BrokenPipeError(),
        ],
    )
    def test_connection_failures(self, error):
        """Refused, reset and closed connections classify as connection_failed."""
        assert classify_error(error) is ErrorCategory.CONNECTION_FAILED

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ReadError("read failed"),
            httpx.RemoteProtocolError("peer closed"),
            socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
        ],
    )
    def test_network_errors(self, error):
        """Other transport failures classify as network_error."""
        assert classify_error(error) is ErrorCategory.NETWORK_ERROR


class TestStatusErrors:
    """Test HTTP-status-bearing shapes."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (429, ErrorCategory.RATE_LIMITED),
            (500, ErrorCategory.SERVER_ERROR),
            (503, ErrorCategory.SERVER_ERROR),
            (599, ErrorCategory.SERVER_ERROR),
            (401, ErrorCategory.AUTHENTICATION_FAILED),
            (403, ErrorCategory.AUTHENTICATION_FAILED),
            (402, ErrorCategory.QUOTA_EXCEEDED),
        ],
    )
    def test_http_status_error(self, status, expected):
        """httpx.HTTPStatusError maps by response status."""
        assert classify_error(create_status_error(status)) is expected

    def test_response_object(self):
        """A response itself carries status_code."""
        assert classify_error(create_response(502)) is ErrorCategory.SERVER_ERROR

    @pytest.mark.parametrize("key", ["status", "status_code"])
    def test_mapping_shape(self, key):
        """Dict-shaped errors with a status key are recognized."""
        assert classify_error({key: 429}) is ErrorCategory.RATE_LIMITED

    def test_provider_error_status_code(self):
        """ProviderError status codes are honored."""
        error = ProviderError("Upstream failed", status_code=500)

        assert classify_error(error) is ErrorCategory.SERVER_ERROR

    def test_status_beats_category(self):
        """Status is checked before the exception's own category."""
        error = InvalidAPIKeyError(status_code=401)

        assert classify_error(error) is ErrorCategory.AUTHENTICATION_FAILED

    @pytest.mark.parametrize("status", [400, 404, 408, 200])
    def test_unmapped_status_falls_through(self, status):
        """Statuses outside the table fall back to temporary_failure."""
        assert classify_error(create_status_error(status)) is ErrorCategory.TEMPORARY_FAILURE

    def test_boolean_status_ignored(self):
        """Booleans are not status codes."""
        assert classify_error({"status": True}) is ErrorCategory.TEMPORARY_FAILURE


class TestMessageErrors:
    """Test exact plain-text messages."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("connection timeout", ErrorCategory.TIMEOUT),
            ("network error", ErrorCategory.NETWORK_ERROR),
            ("rate limit exceeded", ErrorCategory.RATE_LIMITED),
            ("server error", ErrorCategory.SERVER_ERROR),
            ("authentication failed", ErrorCategory.AUTHENTICATION_FAILED),
            ("invalid api key", ErrorCategory.INVALID_API_KEY),
            ("quota exceeded", ErrorCategory.QUOTA_EXCEEDED),
            ("content_size_limit_exceeded", ErrorCategory.CONTENT_SIZE_LIMIT_EXCEEDED),
        ],
    )
    def test_known_strings(self, message, expected):
        """Known literal messages map to their category."""
        assert classify_error(message) is expected

    def test_exception_with_known_message(self):
        """A generic exception whose only argument is a known message."""
        assert classify_error(RuntimeError("quota exceeded")) is ErrorCategory.QUOTA_EXCEEDED

    @pytest.mark.parametrize("message", ["Rate limit exceeded", "rate limit exceeded!", ""])
    def test_match_is_exact(self, message):
        """Near misses are not matched."""
        assert classify_error(message) is ErrorCategory.TEMPORARY_FAILURE

    def test_rate_limit_string_and_status_agree(self):
        """The literal and the 429 status classify identically."""
        assert classify_error("rate limit exceeded") is classify_error(create_status_error(429))


class TestSymbolicErrors:
    """Test category members and category-tagged exceptions."""

    @pytest.mark.parametrize("category", list(ErrorCategory))
    def test_category_maps_to_itself(self, category):
        """Every ErrorCategory member classifies as itself."""
        assert classify_error(category) is category

    @pytest.mark.parametrize(
        "error,expected",
        [
            (RateLimitError(), ErrorCategory.RATE_LIMITED),
            (AuthenticationError(), ErrorCategory.AUTHENTICATION_FAILED),
            (InvalidAPIKeyError(), ErrorCategory.INVALID_API_KEY),
            (ContentSizeLimitError(), ErrorCategory.CONTENT_SIZE_LIMIT_EXCEEDED),
            (UnsupportedProviderError(), ErrorCategory.UNSUPPORTED_PROVIDER),
        ],
    )
    def test_provider_exceptions(self, error, expected):
        """Provider exceptions classify by their category."""
        assert classify_error(error) is expected


class TestFallback:
    """Test the catch-all."""

    @pytest.mark.parametrize(
        "error", [None, 42, object(), ValueError("boom"), KeyError("x"), ["timeout"]]
    )
    def test_unknown_is_temporary_failure(self, error):
        """Anything unrecognized is a temporary failure."""
        assert classify_error(error) is ErrorCategory.TEMPORARY_FAILURE

    def test_never_raises(self):
        """Errors whose attributes blow up still classify."""

        class Hostile:
            @property
            def status_code(self):
                raise RuntimeError("no status")

            @property
            def category(self):
                raise RuntimeError("no category")

        assert classify_error(Hostile()) is ErrorCategory.TEMPORARY_FAILURE

    def test_is_deterministic(self):
        """Same input, same category."""
        error = create_status_error(503)

        assert {classify_error(error) for _ in range(5)} == {ErrorCategory.SERVER_ERROR}
