"""Shared test fixtures.

Every test gets its own SQLite file database under tmp_path, so nothing
touches a real PostgreSQL server.
"""

import os

# Settings are read at import time, so these must be set before any app import.
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.database import DatabaseSessionManager, aget_db
from app.models.user import User
from app.repositories.UserRepository import UserRepository


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def db_manager(tmp_path):
    """A session manager bound to a fresh SQLite database with all tables."""
    manager = DatabaseSessionManager()
    await manager.init(f"sqlite+aiosqlite:///{tmp_path / 'taskboard.db'}")
    yield manager
    await manager.close()


@pytest_asyncio.fixture()
async def session(db_manager):
    async with db_manager.session_factory() as session:
        yield session


@pytest_asyncio.fixture()
async def users(session):
    """Ids of two committed users, so a rollback in a test keeps them."""
    repo = UserRepository(session)
    alice = await repo.create(User(username="alice", email="alice@example.com", password_hash="x"))
    bob = await repo.create(User(username="bob", email="bob@example.com", password_hash="x"))
    await session.commit()
    return alice.user_id, bob.user_id


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture()
async def client(db_manager):
    """An httpx client talking to the app with aget_db bound to the test database."""
    from app.main import app

    async def override_aget_db():
        async with db_manager.get_session() as session:
            yield session

    app.dependency_overrides[aget_db] = override_aget_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def register_user(client):
    """Register an account through the API and return (user_id, auth headers)."""

    async def _register(username="alice", email="alice@example.com", password="secret123"):
        response = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user_id"], {"Authorization": f"Bearer {body['token']}"}

    return _register
