"""Latency and transient-failure harness applied before API operations.

Implements IFaultInjector. Configured from settings; the API layer calls
``before()`` through a dependency, so the core never sees it.
"""

from __future__ import annotations

import asyncio
import logging
import random

from medialib.core.config import Settings
from medialib.domain.exceptions import (
    AuthenticationException,
    MediaLibraryException,
    ServiceUnavailableException,
)

logger = logging.getLogger(__name__)


class FaultInjector:
    """Sleeps for a fixed or random delay, then fails with the configured probability."""

    def __init__(
        self,
        enabled: bool = True,
        error_rate: float = 0.0,
        delay_min_ms: int = 200,
        delay_max_ms: int = 800,
        delay_fixed_ms: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.enabled = enabled
        self.error_rate = error_rate
        self.delay_min_ms = delay_min_ms
        self.delay_max_ms = delay_max_ms
        self.delay_fixed_ms = delay_fixed_ms
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(cls, settings: Settings) -> FaultInjector:
        return cls(
            enabled=settings.mock_enabled,
            error_rate=settings.mock_error_rate,
            delay_min_ms=settings.mock_delay_min_ms,
            delay_max_ms=settings.mock_delay_max_ms,
            delay_fixed_ms=settings.mock_delay_fixed_ms,
        )

    def delay_seconds(self) -> float:
        if self.delay_fixed_ms is not None:
            return self.delay_fixed_ms / 1000
        return self._rng.randint(self.delay_min_ms, self.delay_max_ms) / 1000

    async def before(
        self,
        operation: str,
        failure_probability: float | None = None,
        failure_code: str = "service_unavailable",
        delay_ms: int | None = None,
    ) -> None:
        """Wait, then maybe raise a simulated failure for ``operation``.

        Args:
            operation: Name used in logs and the error message.
            delay_ms: Overrides the configured delay (slow operations such as uploads).
            failure_probability: Overrides the configured error rate.
            failure_code: 'authentication_failed' raises AuthenticationException;
                anything else raises ServiceUnavailableException.

        Raises:
            MediaLibraryException: The simulated failure.
        """
        if not self.enabled:
            return
        delay = self.delay_seconds() if delay_ms is None else delay_ms / 1000
        if delay > 0:
            await asyncio.sleep(delay)
        probability = self.error_rate if failure_probability is None else failure_probability
        if probability <= 0 or self._rng.random() >= probability:
            return
        logger.warning("Simulated failure for %s (p=%.2f)", operation, probability)
        raise self._failure(operation, probability, failure_code)

    @staticmethod
    def _failure(operation: str, probability: float, failure_code: str) -> MediaLibraryException:
        if failure_code == "authentication_failed":
            return AuthenticationException("Authentication service unavailable")
        return ServiceUnavailableException(
            f"Service temporarily unavailable: {operation}", probability=probability
        )


class NoopFaultInjector:
    """Fault injector that never waits or fails (tests, production-like runs)."""

    async def before(
        self,
        operation: str,
        failure_probability: float | None = None,
        failure_code: str = "service_unavailable",
        delay_ms: int | None = None,
    ) -> None:
        return None
