"""
Analytics and search routes.
GET /analytics, GET /search?q=
"""
from __future__ import annotations

from fastapi import APIRouter, Query

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.analytics import AnalyticsData, SearchData
from taskflow.schemas.response import APIResponse
from taskflow.services.analytics_service import analytics_service

router = APIRouter(tags=["Analytics"])


@router.get(
    "/analytics",
    response_model=APIResponse[AnalyticsData],
    summary="Task and project aggregates for the caller",
)
async def get_analytics(
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[AnalyticsData]:
    data = await analytics_service.get_analytics(db, current_user=current_user)
    return APIResponse(data=data)


@router.get(
    "/search",
    response_model=APIResponse[SearchData],
    summary="Search projects and tasks by text",
)
async def search(
    current_user: CurrentUser,
    db: DBSession,
    q: str | None = Query(default=None, max_length=200),
) -> APIResponse[SearchData]:
    data = await analytics_service.search(db, term=q, current_user=current_user)
    return APIResponse(data=data)
