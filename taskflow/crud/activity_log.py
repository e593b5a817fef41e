"""
ActivityLog read queries. Writes go through services.activity_service.
"""
from __future__ import annotations

import uuid

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.crud.base import CRUDBase
from taskflow.models.activity_log import ActivityLog
from taskflow.schemas.activity_log import ActivityLogRead


class CRUDActivityLog(CRUDBase[ActivityLog, ActivityLogRead]):

    async def list_recent(
        self,
        db: AsyncSession,
        *,
        where: ColumnElement[bool],
        limit: int = 20,
    ) -> list[ActivityLog]:
        result = await db.execute(
            select(ActivityLog)
            .where(where)
            .order_by(ActivityLog.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_for_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        limit: int = 30,
    ) -> list[ActivityLog]:
        return await self.list_recent(
            db, where=ActivityLog.project_id == project_id, limit=limit
        )


crud_activity_log = CRUDActivityLog(ActivityLog)
