"""Logging setup."""

from medialib.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
