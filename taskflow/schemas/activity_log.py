"""
ActivityLog Pydantic schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel

from taskflow.schemas.user import UserReadPublic


class ActivityLogRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    action: str
    entity_type: str
    entity_id: uuid.UUID
    entity_name: str
    project_id: uuid.UUID | None
    details: str | None
    created_at: datetime
    user: UserReadPublic | None = None

    model_config = {"from_attributes": True}


class ActivityListData(BaseModel):
    activities: list[ActivityLogRead]
