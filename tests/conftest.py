"""
Shared fixtures: settings on a throwaway SQLite file, a live app client,
and a raw database session for service-level tests.
"""

from typing import Callable, Dict

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from auth.dependencies import CurrentUser
from config.settings import Settings
from database import helpers
from database.session import Database
from main import create_app

TEST_SECRET = "test-secret-key-minimum-32-characters-long"
TEST_PASSWORD = "password123"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        jwt_expiry_seconds=86400,
        environment="test",
        log_level="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register_user(client) -> Callable[..., Dict]:
    """Register through the API and return ``{"user", "token", "headers"}``."""

    def _register(email: str, password: str = TEST_PASSWORD) -> Dict:
        response = client.post(
            "/api/auth/register", json={"email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            "user": data["user"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _register


@pytest_asyncio.fixture
async def database(settings):
    db = Database(settings.database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database):
    async with database.session_factory() as s:
        yield s


@pytest_asyncio.fixture
async def make_user(session) -> Callable:
    """Insert a user row directly and return its ``CurrentUser`` identity."""

    async def _make(email: str) -> CurrentUser:
        user = await helpers.create_user(session, email, "not-a-real-hash")
        return CurrentUser(user_id=user.id, email=user.email)

    return _make
