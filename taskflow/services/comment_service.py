"""
Comment business logic service.
Comments are readable and writable by anyone who can see the task; only the
author may delete one.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import ForbiddenException, NotFoundException
from taskflow.crud.comment import crud_comment
from taskflow.crud.task import crud_task
from taskflow.models.comment import Comment
from taskflow.models.user import User
from taskflow.schemas.comment import CommentCreate
from taskflow.services.access import get_visible_task
from taskflow.services.activity_service import activity_service


class CommentService:

    async def list_comments(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        current_user: User,
    ) -> list[Comment]:
        await get_visible_task(db, task_id=task_id, user=current_user)
        return await crud_comment.list_by_task(db, task_id=task_id)

    async def create_comment(
        self,
        db: AsyncSession,
        *,
        task_id: uuid.UUID,
        comment_in: CommentCreate,
        current_user: User,
    ) -> Comment:
        task = await get_visible_task(db, task_id=task_id, user=current_user)
        comment = await crud_comment.create_comment(
            db,
            content=comment_in.content,
            task_id=task.id,
            author_id=current_user.id,
        )

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="created",
            entity_type="comment",
            entity_id=comment.id,
            entity_name=task.title,
            project_id=task.project_id,
        )
        return comment

    async def delete_comment(
        self,
        db: AsyncSession,
        *,
        comment_id: uuid.UUID,
        current_user: User,
    ) -> None:
        comment = await crud_comment.get(db, comment_id)
        if comment is None:
            raise NotFoundException("Comment")
        if comment.author_id != current_user.id:
            raise ForbiddenException("Not authorized to delete this comment")

        task = await crud_task.get(db, comment.task_id)
        await crud_comment.remove(db, db_obj=comment)

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="deleted",
            entity_type="comment",
            entity_id=comment_id,
            entity_name=task.title if task else "",
            project_id=task.project_id if task else None,
        )


comment_service = CommentService()
