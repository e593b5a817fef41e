"""
Project CRUD operations.
Owns the project scope query (projects a user owns or is a member of) and the
ordered cascade used when a project is deleted.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import ColumnElement, case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.crud.base import CRUDBase
from taskflow.models.activity_log import ActivityLog
from taskflow.models.comment import Comment
from taskflow.models.project import Project, project_members
from taskflow.models.task import Subtask, Task
from taskflow.models.user import User
from taskflow.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def accessible_clause(user_id: uuid.UUID) -> ColumnElement[bool]:
    """Owner OR member of the project."""
    member_of = select(project_members.c.project_id).where(
        project_members.c.user_id == user_id
    )
    return or_(Project.owner_id == user_id, Project.id.in_(member_of))


class CRUDProject(CRUDBase[Project, ProjectUpdate]):

    async def get_with_relations(
        self, db: AsyncSession, project_id: uuid.UUID
    ) -> Project | None:
        """Fetch a project with owner and members freshly loaded."""
        result = await db.execute(
            select(Project)
            .where(Project.id == project_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_accessible_ids(
        self, db: AsyncSession, *, user_id: uuid.UUID
    ) -> list[uuid.UUID]:
        """Return ids of every project the user owns or is a member of."""
        result = await db.execute(select(Project.id).where(accessible_clause(user_id)))
        return list(result.scalars().all())

    async def get_accessible(
        self, db: AsyncSession, *, project_id: uuid.UUID, user_id: uuid.UUID
    ) -> Project | None:
        result = await db.execute(
            select(Project).where(Project.id == project_id, accessible_clause(user_id))
        )
        return result.scalar_one_or_none()

    async def get_owned(
        self, db: AsyncSession, *, project_id: uuid.UUID, owner_id: uuid.UUID
    ) -> Project | None:
        result = await db.execute(
            select(Project).where(Project.id == project_id, Project.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list_accessible(
        self,
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        status: str | None = None,
    ) -> list[Project]:
        query = select(Project).where(accessible_clause(user_id))
        if status is not None:
            query = query.where(Project.status == status)
        result = await db.execute(query.order_by(Project.created_at.desc()))
        return list(result.scalars().all())

    async def search(
        self, db: AsyncSession, *, term: str, where: ColumnElement[bool], limit: int = 5
    ) -> list[Project]:
        result = await db.execute(
            select(Project)
            .where(
                where,
                or_(
                    Project.name.icontains(term, autoescape=True),
                    Project.description.icontains(term, autoescape=True),
                ),
            )
            .order_by(Project.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def task_counts(
        self, db: AsyncSession, project_ids: list[uuid.UUID]
    ) -> dict[uuid.UUID, tuple[int, int]]:
        """Map project id -> (total tasks, completed tasks)."""
        if not project_ids:
            return {}
        result = await db.execute(
            select(
                Task.project_id,
                func.count(Task.id),
                func.sum(case((Task.status == "completed", 1), else_=0)),
            )
            .where(Task.project_id.in_(project_ids))
            .group_by(Task.project_id)
        )
        return {row[0]: (row[1], int(row[2] or 0)) for row in result.all()}

    async def count_by_status(
        self, db: AsyncSession, *, user_id: uuid.UUID
    ) -> dict[str, int]:
        result = await db.execute(
            select(Project.status, func.count(Project.id))
            .where(accessible_clause(user_id))
            .group_by(Project.status)
        )
        return {row[0]: row[1] for row in result.all()}

    async def create_project(
        self,
        db: AsyncSession,
        *,
        obj_in: ProjectCreate,
        owner_id: uuid.UUID,
        members: list[User],
    ) -> Project:
        data: dict[str, Any] = obj_in.model_dump(exclude={"members"}, exclude_none=True)
        project = Project(**data, owner_id=owner_id)
        project.members = members
        db.add(project)
        await db.flush()
        return project

    async def delete_cascade(self, db: AsyncSession, *, project: Project) -> dict[str, int]:
        """
        Delete a project and everything hanging off it, in order:
        comments on its tasks, subtasks, tasks, its activity entries, then the
        project row (membership rows go with it). Runs inside the caller's
        transaction. Returns per-table delete counts.
        """
        task_ids = list(
            (await db.execute(select(Task.id).where(Task.project_id == project.id)))
            .scalars()
            .all()
        )

        comments = await db.execute(delete(Comment).where(Comment.task_id.in_(task_ids)))
        subtasks = await db.execute(delete(Subtask).where(Subtask.task_id.in_(task_ids)))
        tasks = await db.execute(delete(Task).where(Task.project_id == project.id))
        logs = await db.execute(
            delete(ActivityLog).where(ActivityLog.project_id == project.id)
        )

        await db.delete(project)
        await db.flush()

        counts = {
            "comments": comments.rowcount or 0,
            "subtasks": subtasks.rowcount or 0,
            "tasks": tasks.rowcount or 0,
            "activity_logs": logs.rowcount or 0,
        }
        logger.info("Cascade-deleted project %s: %s", project.id, counts)
        return counts


crud_project = CRUDProject(Project)
