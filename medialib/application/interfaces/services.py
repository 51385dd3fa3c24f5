"""Service interfaces (ports) for collaborators outside the core."""

from __future__ import annotations

from typing import Protocol


class IFaultInjector(Protocol):
    """Protocol for the latency / transient-failure harness.

    Called at the boundary before an operation runs; never inside the core.
    """

    async def before(
        self,
        operation: str,
        failure_probability: float | None = None,
        failure_code: str = "service_unavailable",
        delay_ms: int | None = None,
    ) -> None:
        """Sleep for the configured latency, then maybe raise a simulated failure."""
