"""
Request helpers shared by the endpoint tests.
"""
from __future__ import annotations

from typing import Any

from httpx import AsyncClient


async def create_project(
    client: AsyncClient, user: dict[str, Any], name: str = "Apollo", **kwargs: Any
) -> dict[str, Any]:
    response = await client.post(
        "/api/projects", json={"name": name, **kwargs}, headers=user["headers"]
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["project"]


async def create_task(
    client: AsyncClient, user: dict[str, Any], title: str = "Write docs", **kwargs: Any
) -> dict[str, Any]:
    response = await client.post(
        "/api/tasks", json={"title": title, **kwargs}, headers=user["headers"]
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["task"]


async def add_comment(
    client: AsyncClient, user: dict[str, Any], task_id: str, content: str = "Looks good"
) -> dict[str, Any]:
    response = await client.post(
        f"/api/tasks/{task_id}/comments",
        json={"content": content},
        headers=user["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["comment"]
