"""
Activity log tests.
Covers: entries written for each change, feed scoping, project feed access.
"""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

from helpers import add_comment, create_project, create_task

pytestmark = pytest.mark.asyncio


async def _feed(client: AsyncClient, user: dict, **params) -> list[dict]:
    response = await client.get("/api/activity", params=params, headers=user["headers"])
    assert response.status_code == 200, response.text
    return response.json()["data"]["activities"]


class TestActivityRecording:
    async def test_task_lifecycle_is_recorded(self, client: AsyncClient, alice: dict) -> None:
        project = await create_project(client, alice)
        task = await create_task(client, alice, "Ship it", project_id=project["id"])
        await client.put(
            f"/api/tasks/{task['id']}",
            json={"status": "in-review", "priority": "urgent"},
            headers=alice["headers"],
        )
        await client.delete(f"/api/tasks/{task['id']}", headers=alice["headers"])

        entries = await _feed(client, alice)
        summary = [(e["action"], e["entity_type"], e["entity_name"]) for e in entries]
        assert summary == [
            ("deleted", "task", "Ship it"),
            ("updated", "task", "Ship it"),
            ("created", "task", "Ship it"),
            ("created", "project", "Apollo"),
        ]
        assert entries[1]["details"] == "status → in-review, priority → urgent"
        assert all(e["project_id"] == project["id"] for e in entries)
        assert entries[0]["user"]["id"] == alice["id"]

    async def test_comment_is_recorded(self, client: AsyncClient, alice: dict) -> None:
        task = await create_task(client, alice, "Review PR")
        await add_comment(client, alice, task["id"])

        latest = (await _feed(client, alice))[0]
        assert latest["action"] == "created"
        assert latest["entity_type"] == "comment"
        assert latest["entity_name"] == "Review PR"

    async def test_failed_request_writes_nothing(
        self, client: AsyncClient, alice: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice)
        task = await create_task(client, alice, project_id=project["id"])
        await client.put(
            f"/api/tasks/{task['id']}", json={"title": "nope"}, headers=carol["headers"]
        )
        assert await _feed(client, carol) == []


class TestActivityFeeds:
    async def test_feed_includes_shared_projects_only(
        self, client: AsyncClient, alice: dict, bob: dict, carol: dict
    ) -> None:
        shared = await create_project(client, alice, "Shared", members=[bob["id"]])
        await create_project(client, carol, "Carol's secret")

        entries = await _feed(client, bob)
        assert [(e["entity_name"], e["project_id"]) for e in entries] == [
            ("Shared", shared["id"])
        ]

    async def test_feed_limit(self, client: AsyncClient, alice: dict) -> None:
        for index in range(4):
            await create_task(client, alice, f"Task {index}")
        entries = await _feed(client, alice, limit=2)
        assert [e["entity_name"] for e in entries] == ["Task 3", "Task 2"]

    async def test_project_feed(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        project = await create_project(client, alice, members=[bob["id"]])
        await create_task(client, bob, "Inside", project_id=project["id"])
        await create_task(client, bob, "Outside")

        response = await client.get(
            f"/api/activity/project/{project['id']}", headers=bob["headers"]
        )
        assert response.status_code == 200
        names = [e["entity_name"] for e in response.json()["data"]["activities"]]
        assert names == ["Inside", "Apollo"]

    async def test_project_feed_requires_access(
        self, client: AsyncClient, alice: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice)
        response = await client.get(
            f"/api/activity/project/{project['id']}", headers=carol["headers"]
        )
        assert response.status_code == 404

        response = await client.get(
            f"/api/activity/project/{uuid.uuid4()}", headers=alice["headers"]
        )
        assert response.status_code == 404
