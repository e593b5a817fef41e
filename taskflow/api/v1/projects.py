"""
Project routes.
List/create/read/update/delete projects the caller owns or belongs to.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.project import (
    ProjectCreate,
    ProjectData,
    ProjectListData,
    ProjectStatus,
    ProjectUpdate,
)
from taskflow.schemas.response import APIResponse, MessageResponse
from taskflow.services.project_service import project_service

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get(
    "",
    response_model=APIResponse[ProjectListData],
    summary="List accessible projects with task counts",
)
async def list_projects(
    current_user: CurrentUser,
    db: DBSession,
    project_status: ProjectStatus | None = Query(default=None, alias="status"),
) -> APIResponse[ProjectListData]:
    projects = await project_service.list_projects(
        db, current_user=current_user, status=project_status
    )
    return APIResponse(data=ProjectListData(projects=projects, count=len(projects)))


@router.post(
    "",
    response_model=APIResponse[ProjectData],
    status_code=status.HTTP_201_CREATED,
    summary="Create a project owned by the caller",
)
async def create_project(
    project_in: ProjectCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[ProjectData]:
    project = await project_service.create_project(
        db, project_in=project_in, current_user=current_user
    )
    return APIResponse(
        message="Project created successfully", data=ProjectData(project=project)
    )


@router.get(
    "/{project_id}",
    response_model=APIResponse[ProjectData],
    summary="Get a project by ID",
)
async def get_project(
    project_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[ProjectData]:
    project = await project_service.get_project(
        db, project_id=project_id, current_user=current_user
    )
    return APIResponse(data=ProjectData(project=project))


@router.put(
    "/{project_id}",
    response_model=APIResponse[ProjectData],
    summary="Update a project (owner or member)",
)
async def update_project(
    project_id: uuid.UUID,
    project_in: ProjectUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[ProjectData]:
    project = await project_service.update_project(
        db, project_id=project_id, project_in=project_in, current_user=current_user
    )
    return APIResponse(
        message="Project updated successfully", data=ProjectData(project=project)
    )


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete a project and everything in it (owner only)",
)
async def delete_project(
    project_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> MessageResponse:
    await project_service.delete_project(
        db, project_id=project_id, current_user=current_user
    )
    return MessageResponse(message="Project and all associated data deleted successfully")
