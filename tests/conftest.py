"""Shared pytest fixtures for the Bedrock test suite.

Provides:
- seed: a fresh seed snapshot
- store: empty InMemorySnapshotStore
- controller: SnapshotController over ``store`` (starts from the seed)
- client: AsyncClient with get_controller overridden to use ``controller``
"""

import pytest
from httpx import ASGITransport, AsyncClient

from bedrock.api.dependencies import get_controller
from bedrock.models.snapshot import Snapshot
from bedrock.store.controller import SnapshotController
from bedrock.store.persistence import InMemorySnapshotStore
from bedrock.store.seed import make_seed


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def seed() -> Snapshot:
    return make_seed()


@pytest.fixture
def store() -> InMemorySnapshotStore:
    return InMemorySnapshotStore()


@pytest.fixture
def controller(store: InMemorySnapshotStore) -> SnapshotController:
    return SnapshotController(store)


@pytest.fixture
async def client(controller: SnapshotController):
    """AsyncClient with get_controller overridden to use the test controller."""
    from bedrock.api.main import app

    app.dependency_overrides[get_controller] = lambda: controller

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
