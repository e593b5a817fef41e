"""
Task CRUD operations.
Extends CRUDBase with the visibility filter, explicit filters, subtask handling,
and the aggregate counts used by analytics and user stats.
"""
from __future__ import annotations

import json
import uuid
from collections import Counter
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, String, cast, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.time_utils import as_utc, utc_now
from taskflow.crud.base import CRUDBase
from taskflow.models.task import Subtask, Task
from taskflow.schemas.task import SubtaskIn, TaskCreate, TaskFilter, TaskUpdate

# Columns that accept an explicit null on update
NULLABLE_UPDATE_FIELDS = frozenset({"assigned_to_id", "due_date"})


def visibility_clause(
    project_ids: list[uuid.UUID], user_id: uuid.UUID
) -> ColumnElement[bool]:
    """
    Tasks the user may see: in one of their projects, created by them,
    assigned to them, or not attached to any project.
    """
    return or_(
        Task.project_id.in_(project_ids),
        Task.created_by_id == user_id,
        Task.assigned_to_id == user_id,
        Task.project_id.is_(None),
    )


def labels_clause(labels: list[str]) -> ColumnElement[bool]:
    """Match tasks carrying any of the labels (labels are stored as a JSON list)."""
    as_text = cast(Task.labels, String)
    return or_(*(as_text.contains(json.dumps(label), autoescape=True) for label in labels))


def _build_subtasks(items: list[SubtaskIn]) -> list[Subtask]:
    return [
        Subtask(title=item.title, completed=item.completed, position=index)
        for index, item in enumerate(items)
    ]


class CRUDTask(CRUDBase[Task, TaskUpdate]):

    async def get_with_relations(
        self, db: AsyncSession, task_id: uuid.UUID
    ) -> Task | None:
        """Fetch a task with project, people, and subtasks freshly loaded."""
        result = await db.execute(
            select(Task)
            .where(Task.id == task_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_task(
        self,
        db: AsyncSession,
        *,
        obj_in: TaskCreate,
        created_by_id: uuid.UUID,
    ) -> Task:
        task = Task(
            title=obj_in.title,
            description=obj_in.description,
            status=obj_in.status,
            priority=obj_in.priority,
            project_id=obj_in.project_id,
            assigned_to_id=obj_in.assigned_to_id,
            created_by_id=created_by_id,
            due_date=obj_in.due_date,
            labels=list(obj_in.labels),
            tags=list(obj_in.tags),
            order=obj_in.order,
        )
        task.subtasks = _build_subtasks(obj_in.subtasks)
        db.add(task)
        await db.flush()
        return task

    async def update_task(
        self,
        db: AsyncSession,
        *,
        task: Task,
        obj_in: TaskUpdate,
    ) -> Task:
        """
        Apply a partial update. A supplied subtask list replaces the existing
        one; nulls are ignored except on nullable columns.
        """
        data: dict[str, Any] = obj_in.model_dump(exclude_unset=True, exclude={"subtasks"})
        data = {
            field: value
            for field, value in data.items()
            if value is not None or field in NULLABLE_UPDATE_FIELDS
        }
        if obj_in.subtasks is not None:
            task.subtasks = _build_subtasks(obj_in.subtasks)
        task.updated_at = utc_now()
        return await self.update(db, db_obj=task, obj_in=data)

    async def toggle_subtask(
        self,
        db: AsyncSession,
        *,
        task: Task,
        subtask_id: uuid.UUID,
    ) -> Subtask | None:
        """Flip one subtask's completed flag. Siblings are untouched."""
        subtask = next((s for s in task.subtasks if s.id == subtask_id), None)
        if subtask is None:
            return None
        subtask.completed = not subtask.completed
        task.updated_at = utc_now()
        await db.flush()
        return subtask

    async def list_with_filters(
        self,
        db: AsyncSession,
        *,
        filters: TaskFilter,
        project_ids: list[uuid.UUID],
        user_id: uuid.UUID,
    ) -> list[Task]:
        """
        Return the user's visible tasks, newest first, narrowed by every
        explicit filter supplied.
        """
        query = select(Task).where(visibility_clause(project_ids, user_id))

        if filters.project_id is not None:
            query = query.where(Task.project_id == filters.project_id)
        if filters.status is not None:
            query = query.where(Task.status == filters.status)
        if filters.priority is not None:
            query = query.where(Task.priority == filters.priority)
        if filters.assigned_to_id is not None:
            query = query.where(Task.assigned_to_id == filters.assigned_to_id)
        if filters.labels:
            query = query.where(labels_clause(filters.labels))

        result = await db.execute(query.order_by(Task.created_at.desc()))
        return list(result.scalars().all())

    async def search(
        self, db: AsyncSession, *, term: str, where: ColumnElement[bool], limit: int = 5
    ) -> list[Task]:
        result = await db.execute(
            select(Task)
            .where(
                where,
                or_(
                    Task.title.icontains(term, autoescape=True),
                    Task.description.icontains(term, autoescape=True),
                ),
            )
            .order_by(Task.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    # ── Aggregates ────────────────────────────────────────────────────────────

    async def count_grouped(
        self, db: AsyncSession, *, column: Any, where: ColumnElement[bool]
    ) -> dict[str, int]:
        """Count tasks matching where, grouped by one column."""
        result = await db.execute(
            select(column, func.count(Task.id)).where(where).group_by(column)
        )
        return {row[0]: row[1] for row in result.all()}

    async def completion_trend(
        self, db: AsyncSession, *, where: ColumnElement[bool], since: datetime
    ) -> list[tuple[str, int]]:
        """Completed tasks per UTC calendar day (by last update) since a point in time."""
        result = await db.execute(
            select(Task.updated_at).where(
                where, Task.status == "completed", Task.updated_at >= since
            )
        )
        # Bucket here so the day boundary is UTC whatever the server time zone
        days = Counter(as_utc(stamp).date().isoformat() for stamp in result.scalars())
        return sorted(days.items())

    async def count_overdue(
        self, db: AsyncSession, *, where: ColumnElement[bool]
    ) -> int:
        return await self.get_count(
            db, where, Task.due_date < utc_now(), Task.status != "completed"
        )


crud_task = CRUDTask(Task)
