"""
Analytics, search, and demo-data payload schemas.
"""
from __future__ import annotations

import uuid

from pydantic import BaseModel


class NameValue(BaseModel):
    name: str
    value: int


class TrendPoint(BaseModel):
    date: str
    completed: int


class AnalyticsTotals(BaseModel):
    tasks: int
    projects: int
    overdue: int


class AnalyticsData(BaseModel):
    tasks_by_status: list[NameValue]
    tasks_by_priority: list[NameValue]
    projects_by_status: list[NameValue]
    completion_trend: list[TrendPoint]
    totals: AnalyticsTotals


# ── Search ────────────────────────────────────────────────────────────────────

class ProjectSearchHit(BaseModel):
    id: uuid.UUID
    name: str
    description: str
    status: str

    model_config = {"from_attributes": True}


class TaskSearchHit(BaseModel):
    id: uuid.UUID
    title: str
    description: str
    status: str
    priority: str
    project_id: uuid.UUID | None

    model_config = {"from_attributes": True}


class SearchData(BaseModel):
    projects: list[ProjectSearchHit]
    tasks: list[TaskSearchHit]


# ── Demo data ─────────────────────────────────────────────────────────────────

class SeedSummary(BaseModel):
    users: int
    projects: int
    tasks: int
