"""
User directory routes.
GET /users, GET /users/{user_id}
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.response import APIResponse
from taskflow.schemas.user import UserDetailData, UserListData, UserRead
from taskflow.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=APIResponse[UserListData],
    summary="List users sorted by name",
)
async def list_users(
    _current_user: CurrentUser,
    db: DBSession,
    search: str | None = Query(default=None, max_length=100),
) -> APIResponse[UserListData]:
    users = await user_service.list_users(db, search=search)
    return APIResponse(
        data=UserListData(
            users=[UserRead.model_validate(u) for u in users],
            count=len(users),
        )
    )


@router.get(
    "/{user_id}",
    response_model=APIResponse[UserDetailData],
    summary="Get a user with project and task stats",
)
async def get_user(
    user_id: uuid.UUID,
    _current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[UserDetailData]:
    data = await user_service.get_user_with_stats(db, user_id=user_id)
    return APIResponse(data=data)
