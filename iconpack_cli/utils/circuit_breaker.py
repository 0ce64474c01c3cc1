"""
Circuit breaker for the remote icon API.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Callable, Optional

log = logging.getLogger(__name__)


class CircuitState(Enum):
    """States of the circuit breaker."""

    CLOSED = "closed"  # Normal operation
    OPEN = "open"  # Blocking requests
    HALF_OPEN = "half_open"  # Testing if service recovered


class CircuitBreakerError(Exception):
    """Raised when circuit breaker is open."""


class CircuitBreaker:
    """
    Stops contacting the icon API after too many consecutive failures, so a
    dead network does not cost one full timeout per remaining icon.

    States:
    - CLOSED: Normal operation, requests pass through
    - OPEN: Too many failures, requests fail immediately
    - HALF_OPEN: Recovery window elapsed, the next request is let through

    Errors for which `is_outage` returns False mean the API answered, so
    they reset the failure count like a success.
    """

    def __init__(
        self,
        failure_threshold: int = 5,
        recovery_timeout: int = 60,
        is_outage: Optional[Callable[[BaseException], bool]] = None,
    ):
        """
        Args:
            failure_threshold: Consecutive failures before opening. 0 disables.
            recovery_timeout: Seconds to stay open before trying again.
            is_outage: Decides whether an error counts against the circuit.
                Every error counts when omitted.
        """
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.is_outage = is_outage or (lambda exc: True)

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._last_failure_time: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CircuitState:
        """Current circuit state."""
        return self._state

    @property
    def enabled(self) -> bool:
        return self.failure_threshold > 0

    def _check_state(self) -> None:
        """Check if circuit should transition from OPEN to HALF_OPEN."""
        if self._state != CircuitState.OPEN or self._last_failure_time is None:
            return
        elapsed = time.monotonic() - self._last_failure_time
        if elapsed >= self.recovery_timeout:
            log.info(
                f"[yellow]Icon API circuit half-open, retrying after {elapsed:.0f}s"
                "[/yellow]"
            )
            self._state = CircuitState.HALF_OPEN

    async def _on_success(self) -> None:
        async with self._lock:
            self._failure_count = 0
            if self._state == CircuitState.HALF_OPEN:
                log.info("[green]✓ Icon API reachable again.[/green]")
                self._state = CircuitState.CLOSED

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            self._last_failure_time = time.monotonic()

            if self._state == CircuitState.HALF_OPEN:
                self._state = CircuitState.OPEN
            elif (
                self._state == CircuitState.CLOSED
                and self._failure_count >= self.failure_threshold
            ):
                log.error(
                    f"[red]✗ {self._failure_count} icon downloads failed in a row. "
                    f"Skipping the icon API for {self.recovery_timeout}s.[/red]"
                )
                self._state = CircuitState.OPEN

    async def __aenter__(self):
        """Enter context, check if circuit is open."""
        if not self.enabled:
            return self
        async with self._lock:
            self._check_state()
            if self._state == CircuitState.OPEN:
                raise CircuitBreakerError(
                    f"Icon API circuit is open after {self.failure_threshold} "
                    "consecutive failures."
                )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit context, handle success or failure."""
        if not self.enabled:
            return
        if exc_type and self.is_outage(exc_val):
            await self._on_failure()
        else:
            await self._on_success()
