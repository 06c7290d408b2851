"""Service test fixtures — fresh repository + FastAPI test client.

Invariants:
    - Every test gets a fresh DemoRepository (ids restart at 1)
    - get_repository dependency overridden to return that repository

Design Decisions:
    - httpx AsyncClient over ASGITransport: exercises the real app, routing,
      content-type dispatch and error handlers without a server
"""

import pytest
from httpx import ASGITransport, AsyncClient

from demo_api.infrastructure.demo_repository import DemoRepository, get_repository
from demo_api.main import app
from demo_api.schemas.demo import Demo
from demo_api.services.demo_service import DemoService


@pytest.fixture
def repository() -> DemoRepository:
    return DemoRepository()


@pytest.fixture
def service(repository) -> DemoService:
    return DemoService(repository)


@pytest.fixture
def seed_demo(repository) -> Demo:
    """Insert John Doe, 20, directly into the repository."""
    return repository.save(Demo(first_name="John", last_name="Doe", age=20))


@pytest.fixture
async def client(repository):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_repository] = lambda: repository

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
