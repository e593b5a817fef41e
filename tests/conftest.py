"""
Test configuration and shared fixtures.
Uses a fresh in-memory SQLite database per test.
"""
from __future__ import annotations

import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_ENABLED"] = "true"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from typing import Any  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

import taskflow.models  # noqa: E402,F401
from taskflow.db.base import Base  # noqa: E402
from taskflow.db.session import get_db  # noqa: E402
from taskflow.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "secret123"

UserFactory = Callable[..., Awaitable[dict[str, Any]]]


# ── Test database ─────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """A private in-memory database with all tables, dropped after the test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session for asserting on database state directly."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client with get_db bound to the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Helper fixtures ───────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def make_user(client: AsyncClient) -> UserFactory:
    """Register a user and return {id, name, email, token, headers}."""

    async def _make(name: str, email: str, password: str = DEFAULT_PASSWORD) -> dict[str, Any]:
        response = await client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return {
            **data["user"],
            "token": data["token"],
            "headers": {"Authorization": f"Bearer {data['token']}"},
        }

    return _make


@pytest_asyncio.fixture
async def alice(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("Alice", "alice@example.com")


@pytest_asyncio.fixture
async def bob(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("Bob", "bob@example.com")


@pytest_asyncio.fixture
async def carol(make_user: UserFactory) -> dict[str, Any]:
    return await make_user("Carol", "carol@example.com")
