"""
Retry policy definition and construction.
"""

from dataclasses import dataclass, field, fields
from typing import Any, FrozenSet, Iterable, Mapping

from ..categories import DEFAULT_RETRYABLE_CATEGORIES, ErrorCategory
from ..exceptions import InvalidPolicyError


@dataclass(frozen=True)
class RetryPolicy:
    """
    Immutable parameters governing retry behavior for a call.

    Attributes:
        max_attempts: Attempt number at which retrying stops (default: 3)
        base_delay_ms: Delay before the first retry, and floor for all delays (default: 1000)
        max_delay_ms: Cap applied before jitter (default: 30000)
        backoff_factor: Growth factor between consecutive delays (default: 2.0)
        retryable_categories: Error categories that may be retried
        circuit_breaker_threshold: Carried for configuration compatibility, not used
    """

    max_attempts: int = 3
    base_delay_ms: int = 1000
    max_delay_ms: int = 30_000
    backoff_factor: float = 2.0
    retryable_categories: FrozenSet[ErrorCategory] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_CATEGORIES
    )
    circuit_breaker_threshold: int = 5

    def is_retryable(self, category: ErrorCategory) -> bool:
        """Check if the policy lists the given category as retryable."""
        return category in self.retryable_categories

    @classmethod
    def default(cls) -> "RetryPolicy":
        return cls()

    @classmethod
    def aggressive(cls) -> "RetryPolicy":
        """Preset for aggressive retry (more attempts, longer delays)."""
        return cls(
            max_attempts=10,
            base_delay_ms=2000,
            max_delay_ms=120_000,
        )

    @classmethod
    def conservative(cls) -> "RetryPolicy":
        """Preset for conservative retry (fewer attempts, shorter delays)."""
        return cls(
            max_attempts=2,
            base_delay_ms=500,
            max_delay_ms=10_000,
        )

    @classmethod
    def no_retry(cls) -> "RetryPolicy":
        """Preset for no retry (single attempt only)."""
        return cls(max_attempts=0)


_FIELD_NAMES = frozenset(f.name for f in fields(RetryPolicy))
_INT_FIELDS = ("max_attempts", "base_delay_ms", "max_delay_ms", "circuit_breaker_threshold")


def _coerce_categories(value: Iterable[Any]) -> FrozenSet[ErrorCategory]:
    if isinstance(value, (str, bytes)):
        raise InvalidPolicyError(
            "retryable_categories must be a collection of categories, not a string"
        )
    categories = set()
    for item in value:
        try:
            categories.add(ErrorCategory(item))
        except ValueError:
            raise InvalidPolicyError(f"Unknown error category: {item!r}") from None
    return frozenset(categories)


def create_policy(
    overrides: Mapping[str, Any] | None = None, **kwargs: Any
) -> RetryPolicy:
    """
    Build a complete policy by overlaying overrides onto the defaults.

    Overrides can be given as a mapping (e.g. a section of a parsed config
    file), as keyword arguments, or both; keywords win. Category names may be
    plain strings.

    Raises:
        InvalidPolicyError: If a key is unknown or the values are inconsistent
    """
    values = {**(overrides or {}), **kwargs}

    unknown = sorted(set(values) - _FIELD_NAMES)
    if unknown:
        raise InvalidPolicyError(f"Unknown retry policy option(s): {', '.join(unknown)}")

    for name in _INT_FIELDS:
        if name in values:
            value = values[name]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidPolicyError(f"{name} must be a non-negative integer, got {value!r}")

    if "backoff_factor" in values:
        factor = values["backoff_factor"]
        if isinstance(factor, bool) or not isinstance(factor, (int, float)) or factor <= 0:
            raise InvalidPolicyError(f"backoff_factor must be a positive number, got {factor!r}")
        values["backoff_factor"] = float(factor)

    if "retryable_categories" in values:
        values["retryable_categories"] = _coerce_categories(values["retryable_categories"])

    policy = RetryPolicy(**values)
    if policy.base_delay_ms > policy.max_delay_ms:
        raise InvalidPolicyError(
            f"base_delay_ms ({policy.base_delay_ms}) must not exceed "
            f"max_delay_ms ({policy.max_delay_ms})"
        )
    return policy
