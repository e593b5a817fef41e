"""
Task business logic service.
Applies the visibility scope to reads, re-checks project access before
writes, and records activity for every change.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import BadRequestException, ForbiddenException, NotFoundException
from taskflow.crud.project import crud_project
from taskflow.crud.task import crud_task
from taskflow.crud.user import crud_user
from taskflow.models.task import Task
from taskflow.models.user import User
from taskflow.schemas.task import TaskCreate, TaskFilter, TaskUpdate
from taskflow.services import access
from taskflow.services.activity_service import activity_service


class TaskService:

    async def list_tasks(
        self,
        db: AsyncSession,
        *,
        filters: TaskFilter,
        current_user: User,
    ) -> list[Task]:
        """List tasks visible to the current user with filters applied."""
        project_ids = await crud_project.get_accessible_ids(db, user_id=current_user.id)
        return await crud_task.list_with_filters(
            db,
            filters=filters,
            project_ids=project_ids,
            user_id=current_user.id,
        )

    async def get_task(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        current_user: User,
    ) -> Task:
        return await access.get_visible_task(db, task_id=task_id, user=current_user)

    async def create_task(
        self,
        db: AsyncSession,
        *,
        task_in: TaskCreate,
        current_user: User,
    ) -> Task:
        """
        Create a task. A project, when given, must be one the caller owns or
        belongs to; without one the task is personal.
        """
        if task_in.project_id is not None and not await access.can_access_project(
            db, project_id=task_in.project_id, user=current_user
        ):
            raise ForbiddenException("You do not have access to this project")
        await self._ensure_user_exists(db, task_in.assigned_to_id)

        task = await crud_task.create_task(
            db, obj_in=task_in, created_by_id=current_user.id
        )

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="created",
            entity_type="task",
            entity_id=task.id,
            entity_name=task.title,
            project_id=task.project_id,
        )

        return await crud_task.get_with_relations(db, task.id)  # type: ignore[return-value]

    async def update_task(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        task_in: TaskUpdate,
        current_user: User,
    ) -> Task:
        """Update a task. Status may move to any other status."""
        task = await access.get_modifiable_task(
            db, task_id=task_id, user=current_user, verb="update"
        )
        if task_in.assigned_to_id is not None:
            await self._ensure_user_exists(db, task_in.assigned_to_id)

        changes: list[str] = []
        if task_in.status and task_in.status != task.status:
            changes.append(f"status → {task_in.status}")
        if task_in.priority and task_in.priority != task.priority:
            changes.append(f"priority → {task_in.priority}")

        await crud_task.update_task(db, task=task, obj_in=task_in)

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="updated",
            entity_type="task",
            entity_id=task.id,
            entity_name=task.title,
            project_id=task.project_id,
            details=", ".join(changes) or None,
        )

        return await crud_task.get_with_relations(db, task.id)  # type: ignore[return-value]

    async def toggle_subtask(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        subtask_id: uuid.UUID,
        current_user: User,
    ) -> Task:
        task = await access.get_modifiable_task(
            db, task_id=task_id, user=current_user, verb="update"
        )
        subtask = await crud_task.toggle_subtask(db, task=task, subtask_id=subtask_id)
        if subtask is None:
            raise NotFoundException("Subtask")

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="updated",
            entity_type="task",
            entity_id=task.id,
            entity_name=task.title,
            project_id=task.project_id,
            details=f"subtask '{subtask.title}' → {'done' if subtask.completed else 'open'}",
        )

        return await crud_task.get_with_relations(db, task.id)  # type: ignore[return-value]

    async def delete_task(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        current_user: User,
    ) -> None:
        """Hard-delete a task together with its subtasks and comments."""
        task = await access.get_modifiable_task(
            db, task_id=task_id, user=current_user, verb="delete"
        )
        title, project_id = task.title, task.project_id

        await crud_task.remove(db, db_obj=task)

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="deleted",
            entity_type="task",
            entity_id=task_id,
            entity_name=title,
            project_id=project_id,
        )

    # ── Private helpers ───────────────────────────────────────────────────────

    async def _ensure_user_exists(
        self, db: AsyncSession, user_id: uuid.UUID | None
    ) -> None:
        if user_id is None:
            return
        if await crud_user.get(db, user_id) is None:
            raise BadRequestException(
                "Validation error",
                errors=[{"field": "assigned_to_id", "message": "Unknown user id"}],
            )


task_service = TaskService()
