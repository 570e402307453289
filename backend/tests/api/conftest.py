"""API test fixtures — FastAPI test client over a temp-file task store.

Invariants:
    - Every test gets a fresh JsonTaskStore in tmp_path
    - get_task_service dependency overridden to use the test service
    - app.state.task_store set for the readiness check (lifespan does not run)

Design Decisions:
    - httpx ASGITransport: exercises the real app, routes, and error handlers
      without a socket
"""

import pytest
from httpx import ASGITransport, AsyncClient

from tasktrack.api.dependencies import get_task_service
from tasktrack.main import app


@pytest.fixture
async def client(store, service):
    """FastAPI test client with the lifecycle service overridden."""
    app.dependency_overrides[get_task_service] = lambda: service
    app.state.task_store = store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    del app.state.task_store


@pytest.fixture
def make_task(client):
    """POST a task and return its JSON body."""

    async def _make(title="Write spec", **extra) -> dict:
        res = await client.post("/api/v1/tasks", json={"title": title, **extra})
        assert res.status_code == 201, res.text
        return res.json()

    return _make
