"""
Demo data tests.
"""
from __future__ import annotations

import random

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskflow.core.config import settings
from taskflow.models.project import Project
from taskflow.models.task import Task
from taskflow.models.user import User
from taskflow.services.seed_service import seed_demo_data

pytestmark = pytest.mark.asyncio


class TestSeedService:
    async def test_seed_shape(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        async with session_factory() as session:
            summary = await seed_demo_data(session, rng=random.Random(7))
            await session.commit()

        assert summary.users == 10
        assert summary.projects == 15
        assert 45 <= summary.tasks <= 150

        async with session_factory() as session:
            projects = (await session.execute(select(Project))).scalars().all()
            for project in projects:
                assert 1 <= len(project.members) <= 4
                assert project.owner_id not in project.member_ids

            counts = (
                await session.execute(
                    select(Task.project_id, func.count(Task.id)).group_by(Task.project_id)
                )
            ).all()
            assert len(counts) == 15
            assert all(3 <= n <= 10 for _, n in counts)
            assert await session.scalar(select(func.count()).select_from(Task)) == summary.tasks

    async def test_seed_replaces_existing_data(
        self, client: AsyncClient, db: AsyncSession, alice: dict
    ) -> None:
        response = await client.post("/api/seed")
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Database seeded successfully"
        assert body["data"]["users"] == 10

        emails = (await db.execute(select(User.email))).scalars().all()
        assert "alice@example.com" not in emails
        assert "user10@example.com" in emails

        login = await client.post(
            "/api/auth/login",
            json={"email": "user1@example.com", "password": settings.SEED_PASSWORD},
        )
        assert login.status_code == 200

    async def test_seed_disabled(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(settings, "SEED_ENABLED", False)
        response = await client.post("/api/seed")
        assert response.status_code == 404
        assert response.json()["success"] is False
