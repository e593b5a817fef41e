"""
Project endpoint tests.
Covers: create, owner/member scoping, update rights, owner-only delete and its cascade.
"""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from helpers import add_comment, create_project, create_task
from taskflow.models.activity_log import ActivityLog
from taskflow.models.comment import Comment
from taskflow.models.project import Project, project_members
from taskflow.models.task import Subtask, Task

pytestmark = pytest.mark.asyncio


class TestCreateProject:
    async def test_create_project_success(
        self, client: AsyncClient, alice: dict, bob: dict
    ) -> None:
        response = await client.post(
            "/api/projects",
            json={"name": "Apollo", "description": "Moon shot", "members": [bob["id"]]},
            headers=alice["headers"],
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Project created successfully"
        project = body["data"]["project"]
        assert project["name"] == "Apollo"
        assert project["status"] == "active"
        assert project["color"] == "#6366f1"
        assert project["owner"]["id"] == alice["id"]
        assert [m["id"] for m in project["members"]] == [bob["id"]]
        assert project["task_count"] == 0
        assert project["completed_task_count"] == 0

    async def test_owner_is_not_stored_as_member(self, client: AsyncClient, alice: dict) -> None:
        project = await create_project(client, alice, members=[alice["id"]])
        assert project["members"] == []

    async def test_unknown_member_rejected(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/api/projects",
            json={"name": "Apollo", "members": [str(uuid.uuid4())]},
            headers=alice["headers"],
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "members"

    async def test_name_too_long(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            "/api/projects", json={"name": "x" * 201}, headers=alice["headers"]
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "name"

    async def test_create_unauthenticated(self, client: AsyncClient) -> None:
        response = await client.post("/api/projects", json={"name": "Apollo"})
        assert response.status_code == 401


class TestReadProjects:
    async def test_list_only_accessible(
        self, client: AsyncClient, alice: dict, bob: dict, carol: dict
    ) -> None:
        shared = await create_project(client, alice, "Shared", members=[bob["id"]])
        await create_project(client, alice, "Private")
        own = await create_project(client, bob, "Bob's own")

        response = await client.get("/api/projects", headers=bob["headers"])
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["count"] == 2
        assert {p["id"] for p in data["projects"]} == {shared["id"], own["id"]}

        response = await client.get("/api/projects", headers=carol["headers"])
        assert response.json()["data"] == {"projects": [], "count": 0}

    async def test_list_filtered_by_status(self, client: AsyncClient, alice: dict) -> None:
        await create_project(client, alice, "Live")
        done = await create_project(client, alice, "Done", status="completed")

        response = await client.get(
            "/api/projects", params={"status": "completed"}, headers=alice["headers"]
        )
        projects = response.json()["data"]["projects"]
        assert [p["id"] for p in projects] == [done["id"]]

    async def test_task_counts(self, client: AsyncClient, alice: dict) -> None:
        project = await create_project(client, alice)
        await create_task(client, alice, "One", project_id=project["id"])
        await create_task(client, alice, "Two", project_id=project["id"], status="completed")

        response = await client.get(f"/api/projects/{project['id']}", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()["data"]["project"]
        assert data["task_count"] == 2
        assert data["completed_task_count"] == 1

    async def test_get_project_as_stranger(
        self, client: AsyncClient, alice: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice)
        response = await client.get(f"/api/projects/{project['id']}", headers=carol["headers"])
        assert response.status_code == 404
        assert response.json()["message"] == "Project not found"


class TestUpdateProject:
    async def test_member_can_update(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        project = await create_project(client, alice, members=[bob["id"]])
        response = await client.put(
            f"/api/projects/{project['id']}",
            json={"name": "Apollo 2", "status": "completed"},
            headers=bob["headers"],
        )
        assert response.status_code == 200
        updated = response.json()["data"]["project"]
        assert updated["name"] == "Apollo 2"
        assert updated["status"] == "completed"
        assert updated["owner"]["id"] == alice["id"]

    async def test_members_list_replaces_set(
        self, client: AsyncClient, alice: dict, bob: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice, members=[bob["id"]])
        response = await client.put(
            f"/api/projects/{project['id']}",
            json={"members": [carol["id"]]},
            headers=alice["headers"],
        )
        assert [m["id"] for m in response.json()["data"]["project"]["members"]] == [carol["id"]]

        lost = await client.get(f"/api/projects/{project['id']}", headers=bob["headers"])
        assert lost.status_code == 404

    async def test_stranger_cannot_update(
        self, client: AsyncClient, alice: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice)
        response = await client.put(
            f"/api/projects/{project['id']}",
            json={"name": "Hijacked"},
            headers=carol["headers"],
        )
        assert response.status_code == 404
        assert response.json()["message"] == (
            "Project not found or you do not have permission to update it"
        )


class TestDeleteProject:
    async def test_member_cannot_delete(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        project = await create_project(client, alice, members=[bob["id"]])
        response = await client.delete(f"/api/projects/{project['id']}", headers=bob["headers"])
        assert response.status_code == 404
        assert response.json()["message"] == (
            "Project not found or you do not have permission to delete it"
        )

    async def test_owner_delete_cascades(
        self, client: AsyncClient, db: AsyncSession, alice: dict, bob: dict
    ) -> None:
        project = await create_project(client, alice, members=[bob["id"]])
        task = await create_task(
            client,
            bob,
            project_id=project["id"],
            subtasks=[{"title": "Outline"}, {"title": "Draft"}],
        )
        await add_comment(client, alice, task["id"])
        personal = await create_task(client, alice, "Personal errand")

        response = await client.delete(
            f"/api/projects/{project['id']}", headers=alice["headers"]
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Project and all associated data deleted successfully",
        }

        project_id = uuid.UUID(project["id"])
        task_id = uuid.UUID(task["id"])

        assert await db.scalar(select(func.count()).select_from(Project)) == 0
        assert await db.scalar(select(func.count()).select_from(project_members)) == 0
        assert await db.scalar(
            select(func.count()).select_from(Task).where(Task.project_id == project_id)
        ) == 0
        assert await db.scalar(
            select(func.count()).select_from(Subtask).where(Subtask.task_id == task_id)
        ) == 0
        assert await db.scalar(select(func.count()).select_from(Comment)) == 0
        assert await db.scalar(
            select(func.count()).select_from(ActivityLog).where(
                ActivityLog.project_id == project_id
            )
        ) == 0

        # The personal task and the deletion record survive
        assert await db.get(Task, uuid.UUID(personal["id"])) is not None
        entry = (
            await db.execute(
                select(ActivityLog).where(
                    ActivityLog.entity_id == project_id, ActivityLog.action == "deleted"
                )
            )
        ).scalar_one()
        assert entry.entity_type == "project"
        assert entry.entity_name == "Apollo"
        assert entry.project_id is None

    async def test_delete_missing_project(self, client: AsyncClient, alice: dict) -> None:
        response = await client.delete(
            f"/api/projects/{uuid.uuid4()}", headers=alice["headers"]
        )
        assert response.status_code == 404
