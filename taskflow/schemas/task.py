"""
Task Pydantic schemas.
Includes create/update/read variants plus a filter schema for the list endpoint.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskflow.schemas.project import ProjectSummary
from taskflow.schemas.user import UserReadPublic

TaskStatus = Literal["todo", "in-progress", "in-review", "completed"]
TaskPriority = Literal["urgent", "high", "medium", "low", "none"]


def _blank_to_none(v: Any) -> Any:
    # Forms send "" for an unselected project or assignee
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ── Subtasks ──────────────────────────────────────────────────────────────────

class SubtaskIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    completed: bool = False


class SubtaskRead(BaseModel):
    id: uuid.UUID
    title: str
    completed: bool

    model_config = {"from_attributes": True}


# ── Create ────────────────────────────────────────────────────────────────────

class TaskCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    project_id: uuid.UUID | None = None
    assigned_to_id: uuid.UUID | None = None
    due_date: datetime | None = None
    labels: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    subtasks: list[SubtaskIn] = Field(default_factory=list)
    order: int = 0

    @field_validator("project_id", "assigned_to_id", mode="before")
    @classmethod
    def blank_ids_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)


# ── Update ────────────────────────────────────────────────────────────────────

class TaskUpdate(BaseModel):
    """Partial update. Explicit null clears assignee or due date."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to_id: uuid.UUID | None = None
    due_date: datetime | None = None
    labels: list[str] | None = None
    tags: list[str] | None = None
    subtasks: list[SubtaskIn] | None = None
    order: int | None = None

    @field_validator("assigned_to_id", mode="before")
    @classmethod
    def blank_assignee_to_none(cls, v: Any) -> Any:
        return _blank_to_none(v)


# ── Read ──────────────────────────────────────────────────────────────────────

class TaskRead(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    status: str
    priority: str
    project_id: uuid.UUID | None
    project: ProjectSummary | None = None
    assigned_to_id: uuid.UUID | None
    assignee: UserReadPublic | None = None
    created_by_id: uuid.UUID
    creator: UserReadPublic | None = None
    due_date: datetime | None
    labels: list[str]
    tags: list[str]
    subtasks: list[SubtaskRead]
    order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


# ── Filter ────────────────────────────────────────────────────────────────────

class TaskFilter(BaseModel):
    """Explicit filters; each one narrows the caller's visible task set."""

    project_id: uuid.UUID | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assigned_to_id: uuid.UUID | None = None
    labels: list[str] | None = None


# ── Envelope payloads ─────────────────────────────────────────────────────────

class TaskData(BaseModel):
    task: TaskRead


class TaskListData(BaseModel):
    tasks: list[TaskRead]
    count: int
