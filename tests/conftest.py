"""
Shared pytest fixtures.

The application reads its configuration once per process, so the test
environment is set here before anything from ``common`` or ``main`` is
imported. Service tests get a fresh SQLite file per test; API tests share
one path whose file is deleted before each test.
"""

import os
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

_TEST_DIR = Path(tempfile.mkdtemp(prefix="polyclinic-tests-"))
TEST_DB_PATH = _TEST_DIR / "api.db"

os.environ.update(
    {
        "APP_TITLE": "PolyClinic API (tests)",
        "APP_VERSION": "1.0.0",
        "ENVIRONMENT": "development",
        "LOG_LEVEL": "WARNING",
        "DB_DRIVER": "aiosqlite",
        "DB_NAME": str(TEST_DB_PATH),
        "DB_AUTO_CREATE_SCHEMA": "true",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "JWT_ISSUER": "polyclinic-tests",
        "JWT_AUDIENCE": "polyclinic-test-clients",
        "JWT_SUBJECT": "polyclinic-access-token",
        "JWT_EXPIRATION_MINUTES": "2",
    }
)

from common.config import initialize_config  # noqa: E402

initialize_config()

from polyclinic.db import DbManager  # noqa: E402


@pytest_asyncio.fixture
async def db_manager(tmp_path: Path) -> AsyncGenerator[DbManager, None]:
    """DbManager over an empty SQLite database with the full schema."""
    manager = DbManager(f"sqlite+aiosqlite:///{tmp_path / 'polyclinic.db'}", pool_size=None)
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest_asyncio.fixture
async def db_session(db_manager: DbManager) -> AsyncGenerator[AsyncSession, None]:
    async with db_manager.session_maker() as session:
        yield session


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient running the real lifespan against a fresh database file."""
    TEST_DB_PATH.unlink(missing_ok=True)

    from main import app

    with TestClient(app) as test_client:
        yield test_client
