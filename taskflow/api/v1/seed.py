"""
Demo data route. POST /seed wipes the database, so it answers 404 unless
SEED_ENABLED is set.
"""
from __future__ import annotations

from fastapi import APIRouter

from taskflow.core.config import settings
from taskflow.core.dependencies import DBSession
from taskflow.core.exceptions import NotFoundException
from taskflow.schemas.analytics import SeedSummary
from taskflow.schemas.response import APIResponse
from taskflow.services.seed_service import seed_demo_data

router = APIRouter(tags=["Demo data"])


@router.post(
    "/seed",
    response_model=APIResponse[SeedSummary],
    summary="Replace all data with demo content",
)
async def seed(db: DBSession) -> APIResponse[SeedSummary]:
    if not settings.SEED_ENABLED:
        raise NotFoundException("Route")
    summary = await seed_demo_data(db)
    return APIResponse(message="Database seeded successfully", data=summary)
