"""Pytest configuration and fixtures for medialib.

Every test gets a fresh record store loaded from the seed snapshot; HTTP
tests run against an app built by create_app() with fault injection off.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from medialib.application.use_cases import (
    CollectionService,
    FolderService,
    MediaService,
    TagService,
    UserService,
)
from medialib.infrastructure.persistence import RecordStore
from medialib.infrastructure.services import NoopFaultInjector
from medialib.main import create_app


@pytest.fixture
def store() -> RecordStore:
    """Fresh store per test (seed snapshot)."""
    return RecordStore.from_seed()


@pytest.fixture
def folder_service(store: RecordStore) -> FolderService:
    return FolderService(store)


@pytest.fixture
def media_service(store: RecordStore) -> MediaService:
    return MediaService(store)


@pytest.fixture
def collection_service(store: RecordStore) -> CollectionService:
    return CollectionService(store)


@pytest.fixture
def tag_service(store: RecordStore) -> TagService:
    return TagService(store)


@pytest.fixture
def user_service(store: RecordStore) -> UserService:
    return UserService(store)


@pytest.fixture
def app(store: RecordStore):
    """FastAPI app wired to the per-test store, without latency or random failures."""
    application = create_app()
    application.state.store = store
    application.state.fault_injector = NoopFaultInjector()
    return application


@pytest.fixture
async def client(app) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
