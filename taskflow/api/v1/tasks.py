"""
Task routes.
Scoped listing with filters, CRUD, and subtask toggling.
"""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.response import APIResponse, MessageResponse
from taskflow.schemas.task import (
    TaskCreate,
    TaskData,
    TaskFilter,
    TaskListData,
    TaskPriority,
    TaskRead,
    TaskStatus,
    TaskUpdate,
)
from taskflow.services.task_service import task_service

router = APIRouter(prefix="/tasks", tags=["Tasks"])


def _task_filter_params(
    project_id: uuid.UUID | None = Query(default=None),
    task_status: TaskStatus | None = Query(default=None, alias="status"),
    priority: TaskPriority | None = Query(default=None),
    assigned_to_id: uuid.UUID | None = Query(default=None),
    labels: str | None = Query(default=None, description="Comma-separated; matches any"),
) -> TaskFilter:
    label_list = [label.strip() for label in (labels or "").split(",") if label.strip()]
    return TaskFilter(
        project_id=project_id,
        status=task_status,
        priority=priority,
        assigned_to_id=assigned_to_id,
        labels=label_list or None,
    )


@router.get(
    "",
    response_model=APIResponse[TaskListData],
    summary="List visible tasks with filters",
)
async def list_tasks(
    current_user: CurrentUser,
    db: DBSession,
    filters: Annotated[TaskFilter, Depends(_task_filter_params)],
) -> APIResponse[TaskListData]:
    tasks = await task_service.list_tasks(db, filters=filters, current_user=current_user)
    return APIResponse(
        data=TaskListData(
            tasks=[TaskRead.model_validate(t) for t in tasks],
            count=len(tasks),
        )
    )


@router.post(
    "",
    response_model=APIResponse[TaskData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    task_in: TaskCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[TaskData]:
    task = await task_service.create_task(db, task_in=task_in, current_user=current_user)
    return APIResponse(
        message="Task created successfully",
        data=TaskData(task=TaskRead.model_validate(task)),
    )


@router.get(
    "/{task_id}",
    response_model=APIResponse[TaskData],
    summary="Get a task by ID",
)
async def get_task(
    task_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[TaskData]:
    task = await task_service.get_task(db, task_id=task_id, current_user=current_user)
    return APIResponse(data=TaskData(task=TaskRead.model_validate(task)))


@router.put(
    "/{task_id}",
    response_model=APIResponse[TaskData],
    summary="Update a task",
)
async def update_task(
    task_id: uuid.UUID,
    task_in: TaskUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[TaskData]:
    task = await task_service.update_task(
        db, task_id=task_id, task_in=task_in, current_user=current_user
    )
    return APIResponse(
        message="Task updated successfully",
        data=TaskData(task=TaskRead.model_validate(task)),
    )


@router.delete(
    "/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task with its subtasks and comments",
)
async def delete_task(
    task_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> MessageResponse:
    await task_service.delete_task(db, task_id=task_id, current_user=current_user)
    return MessageResponse(message="Task deleted successfully")


@router.patch(
    "/{task_id}/subtasks/{subtask_id}/toggle",
    response_model=APIResponse[TaskData],
    summary="Flip one subtask's completed flag",
)
async def toggle_subtask(
    task_id: uuid.UUID,
    subtask_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[TaskData]:
    task = await task_service.toggle_subtask(
        db, task_id=task_id, subtask_id=subtask_id, current_user=current_user
    )
    return APIResponse(data=TaskData(task=TaskRead.model_validate(task)))
