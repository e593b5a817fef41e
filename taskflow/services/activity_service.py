"""
Activity logging service.
Appends audit records to the activity_logs table in the caller's transaction
and serves the activity feeds.
"""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.crud.activity_log import crud_activity_log
from taskflow.crud.project import crud_project
from taskflow.models.activity_log import ActivityLog
from taskflow.models.user import User
from taskflow.services.access import require_project_access

logger = logging.getLogger(__name__)


class ActivityService:

    async def log(
        self,
        db: AsyncSession,
        *,
        user_id: uuid.UUID,
        action: str,
        entity_type: str,
        entity_id: uuid.UUID,
        entity_name: str,
        project_id: uuid.UUID | None = None,
        details: str | None = None,
    ) -> ActivityLog:
        """
        Record one create/update/delete. A failed write is logged and
        re-raised so the surrounding request rolls back with it.
        """
        try:
            entry = ActivityLog(
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                entity_name=entity_name[:200],
                project_id=project_id,
                details=details,
            )
            db.add(entry)
            await db.flush()
            return entry
        except Exception as exc:
            logger.error(
                "Failed to write activity log: user_id=%s action=%s entity_type=%s: %s",
                user_id,
                action,
                entity_type,
                exc,
            )
            raise

    async def list_recent(
        self, db: AsyncSession, *, current_user: User, limit: int = 20
    ) -> list[ActivityLog]:
        """The caller's own entries plus entries for projects they can access."""
        project_ids = await crud_project.get_accessible_ids(db, user_id=current_user.id)
        return await crud_activity_log.list_recent(
            db,
            where=or_(
                ActivityLog.user_id == current_user.id,
                ActivityLog.project_id.in_(project_ids),
            ),
            limit=limit,
        )

    async def list_for_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        current_user: User,
        limit: int = 30,
    ) -> list[ActivityLog]:
        await require_project_access(db, project_id=project_id, user=current_user)
        return await crud_activity_log.list_for_project(
            db, project_id=project_id, limit=limit
        )


activity_service = ActivityService()
