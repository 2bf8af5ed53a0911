"""Service test fixtures — file-backed event store + FastAPI test client.

Invariants:
    - Every test gets a fresh EventStore rooted in its own tmp_path
    - get_store dependency overridden to use the test store
    - event_store singleton patched for routes that read it directly (health)

Design Decisions:
    - File tier only: no network, sufficient for route tests
      (the KV tier has its own tests against httpx.MockTransport)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from santa.infrastructure.event_store import EventStore, get_store
import santa.infrastructure.event_store as store_module
from santa.main import app
from santa.services.event_service import EventService


@pytest.fixture
def store(tmp_path):
    return EventStore(tmp_path / "data")


@pytest.fixture
def service(store):
    return EventService(store)


@pytest.fixture
async def client(store):
    """FastAPI test client with store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store

    original_store = store_module.event_store
    store_module.event_store = store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    store_module.event_store = original_store
