"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, the record store and
the fault injector live on app.state for the lifetime of the process.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from medialib.core.config import get_settings
from medialib.infrastructure.persistence import RecordStore
from medialib.infrastructure.services import FaultInjector
from medialib.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    A store or fault injector already set on app.state (tests) is kept.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if getattr(app.state, "store", None) is None:
        app.state.store = RecordStore.from_seed(path_separator=settings.folder_path_separator)
    if getattr(app.state, "fault_injector", None) is None:
        app.state.fault_injector = FaultInjector.from_settings(settings)
    logger.info(
        "Record store loaded: %s (fault injection %s)",
        app.state.store.counts(),
        "on" if settings.mock_enabled else "off",
    )

    yield

    # ---- Shutdown ----
    app.state.store = None
    app.state.fault_injector = None
    logger.info("Record store released")
