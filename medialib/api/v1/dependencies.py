"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the record store, the entity services and
the fault-injection step. Routes depend only on these, never on
infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from medialib.application.interfaces import IFaultInjector, IRecordStore
from medialib.application.use_cases import (
    AuthService,
    CollectionService,
    FolderService,
    MediaService,
    TagService,
    UserService,
)
from medialib.core.config import Settings, get_settings
from medialib.infrastructure.security.jwt import verify_token


def get_store(request: Request) -> IRecordStore:
    """Record store created by the lifespan (or set directly in tests)."""
    return request.app.state.store


def get_fault_injector(request: Request) -> IFaultInjector:
    return request.app.state.fault_injector


StoreDep = Annotated[IRecordStore, Depends(get_store)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def simulate(
    operation: str,
    failure_code: str = "service_unavailable",
    delay_ms: int | None = None,
):
    """Dependency factory: apply artificial latency and random failure before ``operation``."""

    async def _simulate(
        injector: Annotated[IFaultInjector, Depends(get_fault_injector)],
    ) -> None:
        await injector.before(operation, failure_code=failure_code, delay_ms=delay_ms)

    return _simulate


def get_folder_service(store: StoreDep, settings: SettingsDep) -> FolderService:
    return FolderService(store, path_separator=settings.folder_path_separator)


def get_media_service(store: StoreDep, settings: SettingsDep) -> MediaService:
    return MediaService(store, path_separator=settings.folder_path_separator)


def get_collection_service(store: StoreDep) -> CollectionService:
    return CollectionService(store)


def get_tag_service(store: StoreDep) -> TagService:
    return TagService(store)


def get_user_service(store: StoreDep, settings: SettingsDep) -> UserService:
    return UserService(
        store,
        current_user_id=settings.current_user_id,
        recent_capacity=settings.recent_items_capacity,
    )


def get_auth_service(store: StoreDep, settings: SettingsDep) -> AuthService:
    return AuthService(store, settings)


def page_size_param(
    settings: SettingsDep,
    page_size: Annotated[int | None, Query(alias="pageSize")] = None,
) -> int:
    """Resolve ``pageSize``: default from settings, capped at max_page_size."""
    if page_size is None:
        return settings.default_page_size
    return min(page_size, settings.max_page_size)


# ---- Auth (subject from an optional bearer token) ----

_http_bearer = HTTPBearer(auto_error=False)


def get_token_subject(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    settings: SettingsDep,
) -> str | None:
    """Return ``sub`` from a valid bearer token; None when absent or invalid."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials, settings)
    except ValueError:
        return None
    return payload.get("sub")
