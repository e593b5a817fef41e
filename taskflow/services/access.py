"""
Access checks shared by the project, task, comment, and activity services.

Rules:
- A project is readable and writable by its owner and its members; only the
  owner may delete it.
- A task is visible when its project is readable, when the caller created it
  or is assigned to it, or when it has no project at all.
- A task may be mutated when it has no project or when the caller can access
  its project. Creator/assignee alone do not grant writes on project tasks.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import ForbiddenException, NotFoundException
from taskflow.crud.project import crud_project
from taskflow.crud.task import crud_task
from taskflow.models.project import Project
from taskflow.models.task import Task
from taskflow.models.user import User

logger = logging.getLogger(__name__)


async def can_access_project(
    db: AsyncSession, *, project_id: uuid.UUID, user: User
) -> bool:
    project = await crud_project.get_accessible(db, project_id=project_id, user_id=user.id)
    return project is not None


async def require_project_access(
    db: AsyncSession, *, project_id: uuid.UUID, user: User
) -> Project:
    """Return the project if the user owns or belongs to it, else 404."""
    project = await crud_project.get_accessible(db, project_id=project_id, user_id=user.id)
    if project is None:
        raise NotFoundException("Project")
    return project


async def can_view_task(db: AsyncSession, *, task: Task, user: User) -> bool:
    if task.project_id is None:
        return True
    if task.created_by_id == user.id or task.assigned_to_id == user.id:
        return True
    return await can_access_project(db, project_id=task.project_id, user=user)


async def can_modify_task(db: AsyncSession, *, task: Task, user: User) -> bool:
    # Personal tasks are open to any authenticated user
    if task.project_id is None:
        return True
    return await can_access_project(db, project_id=task.project_id, user=user)


async def get_visible_task(db: AsyncSession, *, task_id: uuid.UUID, user: User) -> Task:
    """Load a task the user may see: 404 when missing, 403 when out of scope."""
    task = await crud_task.get_with_relations(db, task_id)
    if task is None:
        raise NotFoundException("Task")
    if not await can_view_task(db, task=task, user=user):
        logger.info("User %s denied read on task %s", user.id, task_id)
        raise ForbiddenException("You do not have access to this task")
    return task


async def get_modifiable_task(
    db: AsyncSession, *, task_id: uuid.UUID, user: User, verb: str = "update"
) -> Task:
    """Load a task the user may change: 404 when missing, 403 when not allowed."""
    task = await crud_task.get_with_relations(db, task_id)
    if task is None:
        raise NotFoundException("Task")
    if not await can_modify_task(db, task=task, user=user):
        logger.info("User %s denied %s on task %s", user.id, verb, task_id)
        raise ForbiddenException(f"You do not have permission to {verb} this task")
    return task
