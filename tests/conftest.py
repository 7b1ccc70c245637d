"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ["CALMNEST_JWT_SECRET"] = "test-signing-key-0123456789abcdef0123456789"
os.environ["CALMNEST_LOG_FORMAT"] = "console"
os.environ["CALMNEST_LOG_LEVEL"] = "WARNING"

from calmnest.auth.jwt import TokenClaims, create_access_token, reset_signing_key  # noqa: E402
from calmnest.config import get_settings  # noqa: E402
from calmnest.database import close_db, get_session_factory, init_db, init_models  # noqa: E402
from calmnest.main import create_app  # noqa: E402
from calmnest.users.store import SqlUserStore  # noqa: E402

ALICE = {
    "username": "alice",
    "email": "alice@x.com",
    "password": "secret1",
    "firstName": "Alice",
    "lastName": "Liddell",
    "age": 29,
}


def _reset_settings() -> None:
    get_settings.cache_clear()
    reset_signing_key()


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[str, None]:
    """Fresh SQLite database file with all tables created."""
    url = f"sqlite+aiosqlite:///{tmp_path / 'calmnest-test.db'}"
    os.environ["CALMNEST_DATABASE_URL"] = url
    _reset_settings()
    await init_db(url)
    await init_models()
    yield url
    await close_db()


@pytest_asyncio.fixture
async def db_session(database: str) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for arranging data and asserting on it."""
    async with get_session_factory()() as session:
        yield session


@pytest_asyncio.fixture
async def client(database: str) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP test client against a freshly built app."""
    app = create_app()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def register_user(client: AsyncClient, **overrides: object) -> dict:
    """Register a user via the API. Returns the payload sent plus token and user id."""
    payload = {**ALICE, **overrides}
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    data = response.json()
    return {**payload, "token": data["token"], "user_id": data["user"]["id"]}


@pytest_asyncio.fixture
async def registered_user(client: AsyncClient) -> dict:
    return await register_user(client)


@pytest_asyncio.fixture
async def authed_client(client: AsyncClient, registered_user: dict) -> AsyncClient:
    """Client carrying a bearer token for the registered user."""
    client.headers["Authorization"] = f"Bearer {registered_user['token']}"
    return client


async def promote(user_id: int, role: str) -> None:
    """Change a user's role directly in the store."""
    async with get_session_factory()() as db:
        store = SqlUserStore(db)
        user = await store.get_by_id(user_id)
        assert user is not None
        await store.update_fields(user, {"role": role})
        await db.commit()


@pytest_asyncio.fixture
async def admin_client(client: AsyncClient) -> AsyncClient:
    """Client authenticated as an admin (registered, promoted, token re-issued)."""
    admin = await register_user(client, username="root", email="root@calmnest.com", password="rootpass1")
    await promote(admin["user_id"], "admin")
    token = create_access_token(TokenClaims(user_id=admin["user_id"], username="root", role="admin"))
    client.headers["Authorization"] = f"Bearer {token}"
    return client
