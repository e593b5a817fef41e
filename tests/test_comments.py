"""
Comment endpoint tests.
Covers: listing order, visibility checks, author-only delete.
"""
from __future__ import annotations

import uuid

import pytest
from httpx import AsyncClient

from helpers import add_comment, create_project, create_task

pytestmark = pytest.mark.asyncio


class TestComments:
    async def test_create_comment(self, client: AsyncClient, alice: dict) -> None:
        task = await create_task(client, alice)
        response = await client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"content": "  First!  "},
            headers=alice["headers"],
        )
        assert response.status_code == 201
        comment = response.json()["data"]["comment"]
        assert comment["content"] == "First!"
        assert comment["task_id"] == task["id"]
        assert comment["author"]["id"] == alice["id"]

    async def test_list_newest_first(self, client: AsyncClient, alice: dict, bob: dict) -> None:
        task = await create_task(client, alice)
        older = await add_comment(client, alice, task["id"], "older")
        newer = await add_comment(client, bob, task["id"], "newer")

        response = await client.get(
            f"/api/tasks/{task['id']}/comments", headers=alice["headers"]
        )
        assert response.status_code == 200
        comments = response.json()["data"]["comments"]
        assert [c["id"] for c in comments] == [newer["id"], older["id"]]
        assert comments[0]["author"]["name"] == "Bob"

    async def test_empty_content_rejected(self, client: AsyncClient, alice: dict) -> None:
        task = await create_task(client, alice)
        response = await client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"content": ""},
            headers=alice["headers"],
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "content"

    async def test_comment_on_invisible_task(
        self, client: AsyncClient, alice: dict, carol: dict
    ) -> None:
        project = await create_project(client, alice)
        task = await create_task(client, alice, project_id=project["id"])

        listing = await client.get(f"/api/tasks/{task['id']}/comments", headers=carol["headers"])
        assert listing.status_code == 403
        posting = await client.post(
            f"/api/tasks/{task['id']}/comments",
            json={"content": "let me in"},
            headers=carol["headers"],
        )
        assert posting.status_code == 403

    async def test_comment_on_missing_task(self, client: AsyncClient, alice: dict) -> None:
        response = await client.post(
            f"/api/tasks/{uuid.uuid4()}/comments",
            json={"content": "hello"},
            headers=alice["headers"],
        )
        assert response.status_code == 404


class TestDeleteComment:
    async def test_author_can_delete(self, client: AsyncClient, alice: dict) -> None:
        task = await create_task(client, alice)
        comment = await add_comment(client, alice, task["id"])

        response = await client.delete(f"/api/comments/{comment['id']}", headers=alice["headers"])
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Comment deleted"}

        listing = await client.get(f"/api/tasks/{task['id']}/comments", headers=alice["headers"])
        assert listing.json()["data"]["comments"] == []

    async def test_other_user_cannot_delete(
        self, client: AsyncClient, alice: dict, bob: dict
    ) -> None:
        task = await create_task(client, alice)
        comment = await add_comment(client, bob, task["id"])

        response = await client.delete(f"/api/comments/{comment['id']}", headers=alice["headers"])
        assert response.status_code == 403
        assert response.json()["message"] == "Not authorized to delete this comment"

    async def test_delete_missing_comment(self, client: AsyncClient, alice: dict) -> None:
        response = await client.delete(f"/api/comments/{uuid.uuid4()}", headers=alice["headers"])
        assert response.status_code == 404
        assert response.json()["message"] == "Comment not found"
