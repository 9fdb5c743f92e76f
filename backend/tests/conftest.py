"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Tests never reach real AWS: fake credentials/region, store dependency overridden
    - Every test gets a fresh InMemoryUserStore

Design Decisions:
    - httpx ASGITransport does not run the lifespan, so no boto3 client is built
      for route tests (ADR: in-memory store is the only store under test)
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

# Ensure tests don't accidentally use real AWS credentials or tables
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("TABLE_NAME", "users-test")
os.environ.setdefault("LOG_FORMAT", "text")

from user_api.api.dependencies import get_user_store  # noqa: E402
from user_api.main import app  # noqa: E402
from user_api.services.request_dispatch import RequestDispatcher  # noqa: E402
from user_api.services.user_operations import UserOperations  # noqa: E402
from tests.services.fake_user_store import InMemoryUserStore  # noqa: E402


@pytest.fixture
def store():
    return InMemoryUserStore()


@pytest.fixture
def operations(store):
    return UserOperations(store)


@pytest.fixture
def dispatcher(operations):
    return RequestDispatcher(operations, timeout_seconds=1.0)


@pytest.fixture
async def client(store):
    """FastAPI test client with the user store dependency overridden."""
    app.dependency_overrides[get_user_store] = lambda: store
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
