"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
import structlog
from fastapi.testclient import TestClient

from miniblog.apps.blog.repositories.post_repository import PostRepository
from miniblog.apps.blog.services.post_service import PostService
from miniblog.core.config import Settings
from miniblog.core.database import Database
from miniblog.main import AppContext, create_app


class FakeClock:
    """Settable UTC clock so timestamps are deterministic."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by the code under test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'blog_test.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(
        DATABASE_URL=database_url,
        FRONTEND_URL="http://localhost:3000",
        _env_file=None,
    )


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def app(settings, clock):
    context = AppContext(
        settings=settings,
        database=Database(settings.DATABASE_URL),
        clock=clock,
    )
    return create_app(context)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client


@pytest_asyncio.fixture
async def database(database_url):
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.disconnect()


@pytest.fixture
def repository(database):
    return PostRepository(database.get_session)


@pytest.fixture
def service(repository, clock):
    return PostService(repository, clock=clock)
