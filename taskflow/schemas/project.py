"""
Project Pydantic schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from taskflow.schemas.user import UserReadPublic

ProjectStatus = Literal["active", "completed", "archived"]


# ── Create ────────────────────────────────────────────────────────────────────

class ProjectCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=1000)
    status: ProjectStatus = "active"
    members: list[uuid.UUID] = Field(default_factory=list)
    color: str | None = Field(default=None, max_length=20)
    icon: str | None = Field(default=None, max_length=50)


# ── Update ────────────────────────────────────────────────────────────────────

class ProjectUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    status: ProjectStatus | None = None
    members: list[uuid.UUID] | None = None
    color: str | None = Field(default=None, max_length=20)
    icon: str | None = Field(default=None, max_length=50)


# ── Read ──────────────────────────────────────────────────────────────────────

class ProjectSummary(BaseModel):
    """Project fields embedded in task responses."""

    id: uuid.UUID
    name: str
    status: str
    color: str
    icon: str

    model_config = {"from_attributes": True}


class ProjectRead(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    status: str
    owner_id: uuid.UUID
    owner: UserReadPublic
    members: list[UserReadPublic]
    color: str
    icon: str
    created_at: datetime
    updated_at: datetime
    task_count: int = 0
    completed_task_count: int = 0

    model_config = {"from_attributes": True}


# ── Envelope payloads ─────────────────────────────────────────────────────────

class ProjectData(BaseModel):
    project: ProjectRead


class ProjectListData(BaseModel):
    projects: list[ProjectRead]
    count: int
