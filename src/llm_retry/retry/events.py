"""
Structured retry events.

Every decision taken by the orchestrator is reported as a `RetryEvent`: it
is logged through this module's logger with the event fields in `extra`, and
handed to the caller's `on_event` callback when one is given.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..categories import ErrorCategory

logger = logging.getLogger(__name__)


class RetryEventKind(str, Enum):
    SCHEDULED = "retry_scheduled"
    STOPPED = "retry_stopped"
    EXHAUSTED = "retry_exhausted"
    CANCELLED = "retry_cancelled"
    RECOVERED = "retry_recovered"


_LEVELS = {
    RetryEventKind.SCHEDULED: logging.WARNING,
    RetryEventKind.STOPPED: logging.ERROR,
    RetryEventKind.EXHAUSTED: logging.ERROR,
    RetryEventKind.CANCELLED: logging.WARNING,
    RetryEventKind.RECOVERED: logging.INFO,
}


@dataclass(frozen=True)
class RetryEvent:
    """A single retry decision, ready for log or metric collection."""

    kind: RetryEventKind
    attempt: int
    category: ErrorCategory | None = None
    delay_ms: int | None = None
    error: BaseException | None = None

    @property
    def level(self) -> int:
        return _LEVELS[self.kind]

    def describe(self) -> str:
        if self.kind is RetryEventKind.SCHEDULED:
            return (
                f"Attempt {self.attempt} failed ({self.category.value}): {self.error}, "
                f"retrying in {self.delay_ms}ms"
            )
        if self.kind is RetryEventKind.EXHAUSTED:
            return f"All {self.attempt} attempts exhausted. Final error: {self.error}"
        if self.kind is RetryEventKind.STOPPED:
            return f"Not retrying {self.category.value} after attempt {self.attempt}: {self.error}"
        if self.kind is RetryEventKind.CANCELLED:
            return f"Cancelled while waiting to retry after attempt {self.attempt}"
        return f"Succeeded on attempt {self.attempt}"


EventCallback = Callable[[RetryEvent], None]


def emit_event(event: RetryEvent, on_event: EventCallback | None = None) -> None:
    """Log the event and forward it to the callback, if any."""
    logger.log(
        event.level,
        event.describe(),
        extra={
            "retry_event": event.kind.value,
            "error_category": event.category.value if event.category else None,
            "attempt": event.attempt,
            "delay_ms": event.delay_ms,
        },
    )
    if on_event:
        on_event(event)
