"""
Aggregates all v1 API routers into a single APIRouter.
"""
from __future__ import annotations

from fastapi import APIRouter

from taskflow.api.v1 import (
    activity_logs,
    analytics,
    auth,
    comments,
    projects,
    seed,
    tasks,
    users,
)

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(comments.router)
api_router.include_router(users.router)
api_router.include_router(analytics.router)
api_router.include_router(activity_logs.router)
api_router.include_router(seed.router)
