"""
Comment routes.
GET/POST /tasks/{task_id}/comments, DELETE /comments/{comment_id}
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, status

from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.schemas.comment import CommentCreate, CommentData, CommentListData, CommentRead
from taskflow.schemas.response import APIResponse, MessageResponse
from taskflow.services.comment_service import comment_service

router = APIRouter(tags=["Comments"])


@router.get(
    "/tasks/{task_id}/comments",
    response_model=APIResponse[CommentListData],
    summary="List comments on a task, newest first",
)
async def list_comments(
    task_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[CommentListData]:
    comments = await comment_service.list_comments(
        db, task_id=task_id, current_user=current_user
    )
    return APIResponse(
        data=CommentListData(comments=[CommentRead.model_validate(c) for c in comments])
    )


@router.post(
    "/tasks/{task_id}/comments",
    response_model=APIResponse[CommentData],
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment to a task",
)
async def create_comment(
    task_id: uuid.UUID,
    comment_in: CommentCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[CommentData]:
    comment = await comment_service.create_comment(
        db, task_id=task_id, comment_in=comment_in, current_user=current_user
    )
    return APIResponse(data=CommentData(comment=CommentRead.model_validate(comment)))


@router.delete(
    "/comments/{comment_id}",
    response_model=MessageResponse,
    summary="Delete a comment (author only)",
)
async def delete_comment(
    comment_id: uuid.UUID,
    current_user: CurrentUser,
    db: DBSession,
) -> MessageResponse:
    await comment_service.delete_comment(
        db, comment_id=comment_id, current_user=current_user
    )
    return MessageResponse(message="Comment deleted")
