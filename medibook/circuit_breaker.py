"""Circuit breaker guarding calls to the booking backend.

States:
- CLOSED: calls pass through
- OPEN: backend considered down, calls fail immediately
- HALF_OPEN: cool-down elapsed, the next call probes the backend

Only transport failures count; an envelope with ``success: false`` is a
healthy answer.
"""
import logging
import time
from enum import Enum
from typing import Any, Callable, Optional, Tuple, Type

logger = logging.getLogger(__name__)


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreakerOpen(Exception):
    """Raised instead of calling the backend while the circuit is open."""
    pass


class CircuitBreaker:
    """Fail fast once the backend keeps failing."""

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        timeout: float = 60,
        failure_types: Tuple[Type[BaseException], ...] = (Exception,),
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Args:
            name: Label used in log lines
            failure_threshold: Consecutive failures that open the circuit
            timeout: Seconds to stay open before probing again
            failure_types: Exceptions counted as failures; others pass through
            clock: Monotonic time source
        """
        self.name = name
        self.failure_threshold = failure_threshold
        self.timeout = timeout
        self.failure_types = failure_types
        self._clock = clock
        self.failure_count = 0
        self.opened_at: Optional[float] = None
        self._state = CircuitState.CLOSED

    @property
    def state(self) -> str:
        return self._state.value

    def call(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """
        Run ``func`` unless the circuit is open.

        Raises:
            CircuitBreakerOpen: If the backend is still cooling down
        """
        if self._state == CircuitState.OPEN:
            remaining = self._remaining_cooldown()
            if remaining > 0:
                raise CircuitBreakerOpen(
                    f"{self.name} unavailable, retry after {remaining:.1f}s"
                )
            self._state = CircuitState.HALF_OPEN
            logger.info("Circuit %s half-open, probing backend", self.name)

        try:
            result = func(*args, **kwargs)
        except self.failure_types:
            self._record_failure()
            raise

        self._record_success()
        return result

    def reset(self):
        """Close the circuit and forget past failures."""
        self.failure_count = 0
        self.opened_at = None
        self._state = CircuitState.CLOSED

    def _remaining_cooldown(self) -> float:
        if self.opened_at is None:
            return 0
        return max(0.0, self.timeout - (self._clock() - self.opened_at))

    def _record_success(self):
        if self._state == CircuitState.HALF_OPEN:
            logger.info("Circuit %s closed after successful probe", self.name)
        self.reset()

    def _record_failure(self):
        self.failure_count += 1
        if self._state == CircuitState.HALF_OPEN or self.failure_count >= self.failure_threshold:
            self._state = CircuitState.OPEN
            self.opened_at = self._clock()
            logger.warning(
                "Circuit %s opened after %d failures (cool-down %ss)",
                self.name, self.failure_count, self.timeout
            )
