"""
Users API - Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── seeded_store: UserStore preloaded with John Doe (1) and Jane Smith (2)
    ├── empty_store:  UserStore with no users
    ├── app:          FastAPI app built around seeded_store
    └── test_client:  HTTPX AsyncClient talking to `app` in-process
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings before any users_api import reads them
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests
os.environ["SEED_DEMO_USERS"] = "true"

from users_api.services.user_store import DEMO_USERS, UserStore  # noqa: E402


@pytest.fixture
def seeded_store():
    """A store holding the two demo users; the next id is 3."""
    return UserStore(seed=DEMO_USERS)


@pytest.fixture
def empty_store():
    """A store with no users; the next id is 1."""
    return UserStore()


@pytest.fixture
def app(seeded_store):
    """
    A fresh FastAPI app that owns `seeded_store`.

    Tests can inspect the store directly to confirm what the API did.
    """
    from users_api.main import create_app
    return create_app(store=seeded_store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app without a server.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
