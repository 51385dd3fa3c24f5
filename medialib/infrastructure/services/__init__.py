"""Infrastructure implementations of application service interfaces."""

from medialib.infrastructure.services.fault_injection import (
    FaultInjector,
    NoopFaultInjector,
)

__all__ = ["FaultInjector", "NoopFaultInjector"]
