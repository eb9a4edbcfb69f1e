"""Pytest configuration.

- Markers for the test layers (unit, integration, api)
- SQLite database fixtures for integration tests (aiosqlite, one file per test)
- A pinned clock shared by service and repository tests
"""

import inspect
from datetime import UTC, datetime

import pytest
import pytest_asyncio

from account_recovery.core.container import clear_container_cache
from account_recovery.infrastructure.persistence.database import Database
from tests.utils.fakes import RecordingLogger


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


@pytest.fixture
def now() -> datetime:
    """Pinned 'current time' for deterministic expiry checks."""
    return datetime(2026, 3, 14, 9, 30, tzinfo=UTC)


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture(autouse=True)
def reset_container():
    """Settings and singletons never leak between tests."""
    clear_container_cache()
    yield
    clear_container_cache()


@pytest_asyncio.fixture
async def database(tmp_path):
    """File-backed SQLite database with all tables created.

    A file (not :memory:) so separate sessions see each other's commits.
    """
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'account_recovery.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def session(database):
    """Session on the test database (caller commits)."""
    async with database.async_session() as session:
        yield session
