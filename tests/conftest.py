"""
Pytest configuration and shared fixtures.

Every test gets its own SQLite file under tmp_path, so nothing leaks
between tests and no external database is needed.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from task_manager.core.config import Settings
from task_manager.db.session import Database
from task_manager.main import create_app
from task_manager.repositories.user_repository import UserRepository
from task_manager.schemas.user import RegisterRequest


TEST_SECRET_KEY = "test-secret-key-with-at-least-32-characters"
TEST_PASSWORD = "password123"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no HTTP layer")
    config.addinivalue_line("markers", "api: drives the app through TestClient")


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def test_settings(database_url):
    return Settings(
        DATABASE_URL=database_url,
        ENVIRONMENT="test",
        SECRET_KEY=TEST_SECRET_KEY,
        LOG_FORMAT="text",
        LOG_LEVEL="WARNING",
        AUTO_CREATE_TABLES=True,
    )


@pytest.fixture
def client(test_settings):
    app = create_app(test_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register through the API; returns (headers, user json)."""

    def _register(username="testuser", email="test@example.com", password=TEST_PASSWORD):
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register


@pytest.fixture
def auth_headers(register_user):
    headers, _ = register_user()
    return headers


@pytest.fixture
def run_with_db(database_url):
    """
    Run an async test body against a fresh database.

    The body receives (session, alice, bob): an open session and two
    registered users.
    """

    def runner(body):
        async def main():
            database = Database(database_url)
            await database.create_all()
            try:
                async with database.session() as session:
                    users = UserRepository(session)
                    alice = await users.create(
                        RegisterRequest(username="alice", email="alice@example.com", password=TEST_PASSWORD)
                    )
                    bob = await users.create(
                        RegisterRequest(username="bob", email="bob@example.com", password=TEST_PASSWORD)
                    )
                    await body(session, alice, bob)
            finally:
                await database.dispose()

        asyncio.run(main())

    return runner
