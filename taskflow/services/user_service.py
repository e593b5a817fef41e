"""
User directory service.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import NotFoundException
from taskflow.crud.project import accessible_clause, crud_project
from taskflow.crud.task import crud_task
from taskflow.crud.user import crud_user
from taskflow.models.task import Task
from taskflow.models.user import User
from taskflow.schemas.user import UserDetailData, UserRead, UserStats


class UserService:

    async def list_users(
        self, db: AsyncSession, *, search: str | None = None
    ) -> list[User]:
        return await crud_user.search(db, term=(search or "").strip() or None)

    async def get_user_with_stats(
        self, db: AsyncSession, *, user_id: uuid.UUID
    ) -> UserDetailData:
        """
        Stats: projects the user owns or belongs to, tasks assigned to them,
        and how many of those are completed.
        """
        user = await crud_user.get(db, user_id)
        if user is None:
            raise NotFoundException("User")

        stats = UserStats(
            project_count=await crud_project.get_count(db, accessible_clause(user.id)),
            task_count=await crud_task.get_count(db, Task.assigned_to_id == user.id),
            completed_task_count=await crud_task.get_count(
                db, Task.assigned_to_id == user.id, Task.status == "completed"
            ),
        )
        return UserDetailData(user=UserRead.model_validate(user), stats=stats)


user_service = UserService()
