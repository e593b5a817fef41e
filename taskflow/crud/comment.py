"""
Comment CRUD operations.
"""
from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.crud.base import CRUDBase
from taskflow.models.comment import Comment
from taskflow.schemas.comment import CommentCreate


class CRUDComment(CRUDBase[Comment, CommentCreate]):

    async def create_comment(
        self,
        db: AsyncSession,
        *,
        content: str,
        task_id: uuid.UUID,
        author_id: uuid.UUID,
    ) -> Comment:
        comment = Comment(content=content, task_id=task_id, author_id=author_id)
        db.add(comment)
        await db.flush()
        return await self.get_with_author(db, comment.id)  # type: ignore[return-value]

    async def list_by_task(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
    ) -> list[Comment]:
        """Comments on a task, newest first."""
        result = await db.execute(
            select(Comment)
            .where(Comment.task_id == task_id)
            .order_by(Comment.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_with_author(
        self, db: AsyncSession, comment_id: uuid.UUID
    ) -> Comment | None:
        result = await db.execute(
            select(Comment)
            .where(Comment.id == comment_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


crud_comment = CRUDComment(Comment)
