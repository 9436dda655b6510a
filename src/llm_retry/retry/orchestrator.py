"""
Retry orchestration: run an operation, consult `decide` on failure, wait,
and try again until it succeeds or a decision says stop.
"""

import asyncio
import functools
import random
import threading
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    ParamSpec,
    TypeVar,
)

from ..exceptions import RetryCancelledError
from .backoff import JitterSource
from .config import RetryPolicy
from .classifier import classify_error
from .decision import Delay, RetryDecision, Stop, StopReason, decide
from .events import EventCallback, RetryEvent, RetryEventKind, emit_event

P = ParamSpec("P")
T = TypeVar("T")

AsyncSleep = Callable[[float], Awaitable[None]]


class RetryOrchestrator:
    """
    Drives one or many retried calls under a single policy.

    The orchestrator holds no per-call state, so one instance can serve any
    number of concurrent calls. Attempt counters live inside each call.

    Operation failures are exceptions raised by the operation. When the loop
    stops, the last exception is re-raised as is. A cancelled wait between
    attempts re-raises the task's `asyncio.CancelledError` with a
    `RetryCancelledError` as its cause; blocking runs raise
    `RetryCancelledError` itself.
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        on_event: EventCallback | None = None,
        jitter_source: JitterSource = random.random,
        sleep: AsyncSleep = asyncio.sleep,
    ):
        """
        Initialize the orchestrator.

        Args:
            policy: Retry policy (default: RetryPolicy())
            on_event: Optional callback receiving every RetryEvent
            jitter_source: Uniform [0, 1) random source for backoff jitter
            sleep: Async sleep used between attempts
        """
        self.policy = policy or RetryPolicy()
        self.on_event = on_event
        self.jitter_source = jitter_source
        self.sleep = sleep

    def _decide(self, error: Exception, attempt: int) -> RetryDecision:
        decision = decide(error, attempt, self.policy, jitter_source=self.jitter_source)

        if isinstance(decision, Stop):
            kind = (
                RetryEventKind.EXHAUSTED
                if decision.reason is StopReason.MAX_ATTEMPTS
                else RetryEventKind.STOPPED
            )
            self._emit(RetryEvent(kind, attempt, decision.category, error=error))
        else:
            self._emit(
                RetryEvent(
                    RetryEventKind.SCHEDULED,
                    attempt,
                    decision.category,
                    delay_ms=_delay_ms(decision),
                    error=error,
                )
            )
        return decision

    def _emit(self, event: RetryEvent) -> None:
        emit_event(event, self.on_event)

    def _recovered(self, attempt: int) -> None:
        if attempt > 1:
            self._emit(RetryEvent(RetryEventKind.RECOVERED, attempt))

    def _cancelled(self, error: Exception, attempt: int) -> RetryCancelledError:
        self._emit(RetryEvent(RetryEventKind.CANCELLED, attempt, error=error))
        return RetryCancelledError(error, attempt)

    async def _suspend(self, decision: RetryDecision, error: Exception, attempt: int) -> None:
        if not isinstance(decision, Delay):
            return
        try:
            await self.sleep(decision.milliseconds / 1000)
        except asyncio.CancelledError as exc:
            # Must stay a plain CancelledError for asyncio.timeout().
            raise exc from self._cancelled(error, attempt)

    def _suspend_sync(
        self,
        decision: RetryDecision,
        error: Exception,
        attempt: int,
        waiter: threading.Event,
    ) -> None:
        if not isinstance(decision, Delay):
            return
        if waiter.wait(decision.milliseconds / 1000):
            raise self._cancelled(error, attempt)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run an async operation with retry.

        Args:
            operation: Zero-argument callable returning an awaitable; must be
                safe to invoke more than once

        Returns:
            The operation's result from the first successful attempt
        """
        attempt = 1
        while True:
            try:
                result = await operation()
            except Exception as exc:
                decision = self._decide(exc, attempt)
                if isinstance(decision, Stop):
                    raise
                await self._suspend(decision, exc, attempt)
            else:
                self._recovered(attempt)
                return result
            attempt += 1

    def run_sync(
        self,
        operation: Callable[[], T],
        *,
        cancel_event: threading.Event | None = None,
    ) -> T:
        """
        Run a blocking operation with retry.

        Waits block only the calling thread. Setting `cancel_event` from
        another thread interrupts a wait and raises RetryCancelledError.
        """
        waiter = cancel_event or threading.Event()
        attempt = 1
        while True:
            try:
                result = operation()
            except Exception as exc:
                decision = self._decide(exc, attempt)
                if isinstance(decision, Stop):
                    raise
                self._suspend_sync(decision, exc, attempt, waiter)
            else:
                self._recovered(attempt)
                return result
            attempt += 1

    async def stream(self, factory: Callable[[], AsyncIterator[T]]) -> AsyncIterator[T]:
        """
        Stream chunks from a retried streaming operation.

        `factory` is called once per attempt for a fresh iterator. Failures
        before the first chunk is yielded are retried under the policy; once
        a chunk has reached the consumer, failures propagate unchanged.
        """
        attempt = 1
        while True:
            yielded = False
            chunks = factory()
            try:
                try:
                    async for chunk in chunks:
                        yielded = True
                        yield chunk
                finally:
                    aclose = getattr(chunks, "aclose", None)
                    if aclose is not None:
                        await aclose()
            except Exception as exc:
                if yielded:
                    self._emit(
                        RetryEvent(
                            RetryEventKind.STOPPED,
                            attempt,
                            classify_error(exc),
                            error=exc,
                        )
                    )
                    raise
                decision = self._decide(exc, attempt)
                if isinstance(decision, Stop):
                    raise
                await self._suspend(decision, exc, attempt)
            else:
                self._recovered(attempt)
                return
            attempt += 1


def _delay_ms(decision: RetryDecision) -> int:
    return decision.milliseconds if isinstance(decision, Delay) else 0


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    **kwargs,
) -> T:
    """Run an async operation with retry under the given policy."""
    return await RetryOrchestrator(policy, **kwargs).run(operation)


def run_with_retry_sync(
    operation: Callable[[], T],
    policy: RetryPolicy | None = None,
    *,
    cancel_event: threading.Event | None = None,
    **kwargs,
) -> T:
    """Run a blocking operation with retry under the given policy."""
    return RetryOrchestrator(policy, **kwargs).run_sync(operation, cancel_event=cancel_event)


def stream_with_retry(
    factory: Callable[[], AsyncIterator[T]],
    policy: RetryPolicy | None = None,
    **kwargs,
) -> AsyncIterator[T]:
    """Stream from a retried streaming operation under the given policy."""
    return RetryOrchestrator(policy, **kwargs).stream(factory)


def with_retry(
    policy: RetryPolicy | None = None,
    on_event: EventCallback | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """
    Decorator for synchronous functions with retry logic.

    Args:
        policy: Retry policy (default: RetryPolicy())
        on_event: Optional callback receiving every RetryEvent

    Returns:
        Decorated function with retry behavior
    """
    orchestrator = RetryOrchestrator(policy, on_event=on_event)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return orchestrator.run_sync(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator


def async_with_retry(
    policy: RetryPolicy | None = None,
    on_event: EventCallback | None = None,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Decorator for async functions with retry logic.

    Args:
        policy: Retry policy (default: RetryPolicy())
        on_event: Optional callback receiving every RetryEvent

    Returns:
        Decorated async function with retry behavior
    """
    orchestrator = RetryOrchestrator(policy, on_event=on_event)

    def decorator(func: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            return await orchestrator.run(functools.partial(func, *args, **kwargs))

        return wrapper

    return decorator
