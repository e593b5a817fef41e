"""
Activity log routes.
GET /activity, GET /activity/project/{project_id}
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.activity_log import ActivityListData, ActivityLogRead
from taskflow.schemas.response import APIResponse
from taskflow.services.activity_service import activity_service

router = APIRouter(prefix="/activity", tags=["Activity Logs"])


@router.get(
    "",
    response_model=APIResponse[ActivityListData],
    summary="Recent activity visible to the caller",
)
async def recent_activity(
    current_user: CurrentUser,
    db: DBSession,
    limit: int = Query(default=20, ge=1, le=100),
) -> APIResponse[ActivityListData]:
    logs = await activity_service.list_recent(db, current_user=current_user, limit=limit)
    return APIResponse(
        data=ActivityListData(activities=[ActivityLogRead.model_validate(log) for log in logs])
    )


@router.get(
    "/project/{project_id}",
    response_model=APIResponse[ActivityListData],
    summary="Activity for one accessible project",
)
async def project_activity(
    project_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
    limit: int = Query(default=30, ge=1, le=100),
) -> APIResponse[ActivityListData]:
    logs = await activity_service.list_for_project(
        db, project_id=project_id, current_user=current_user, limit=limit
    )
    return APIResponse(
        data=ActivityListData(activities=[ActivityLogRead.model_validate(log) for log in logs])
    )
