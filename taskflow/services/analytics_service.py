"""
Analytics and search service.
Every aggregate is scoped to what the caller can see.
"""
from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.time_utils import days_ago
from taskflow.crud.project import accessible_clause, crud_project
from taskflow.crud.task import crud_task, visibility_clause
from taskflow.models.task import Task
from taskflow.models.user import User
from taskflow.schemas.analytics import (
    AnalyticsData,
    AnalyticsTotals,
    NameValue,
    ProjectSearchHit,
    SearchData,
    TaskSearchHit,
    TrendPoint,
)

TREND_DAYS = 7
SEARCH_LIMIT = 5


def _as_name_values(counts: dict[str, int]) -> list[NameValue]:
    return [NameValue(name=name, value=value) for name, value in sorted(counts.items())]


class AnalyticsService:

    async def get_analytics(
        self, db: AsyncSession, *, current_user: User
    ) -> AnalyticsData:
        """
        Breakdowns by status and priority cover tasks the caller created or is
        assigned to. Trend and totals cover the caller's visible tasks and
        accessible projects.
        """
        own_tasks = or_(
            Task.created_by_id == current_user.id,
            Task.assigned_to_id == current_user.id,
        )
        project_ids = await crud_project.get_accessible_ids(db, user_id=current_user.id)
        visible = visibility_clause(project_ids, current_user.id)

        by_status = await crud_task.count_grouped(db, column=Task.status, where=own_tasks)
        by_priority = await crud_task.count_grouped(db, column=Task.priority, where=own_tasks)
        projects_by_status = await crud_project.count_by_status(db, user_id=current_user.id)
        trend = await crud_task.completion_trend(
            db, where=visible, since=days_ago(TREND_DAYS)
        )

        return AnalyticsData(
            tasks_by_status=_as_name_values(by_status),
            tasks_by_priority=_as_name_values(by_priority),
            projects_by_status=_as_name_values(projects_by_status),
            completion_trend=[TrendPoint(date=day, completed=n) for day, n in trend],
            totals=AnalyticsTotals(
                tasks=await crud_task.get_count(db, visible),
                projects=len(project_ids),
                overdue=await crud_task.count_overdue(db, where=visible),
            ),
        )

    async def search(
        self, db: AsyncSession, *, term: str | None, current_user: User
    ) -> SearchData:
        """Up to five projects and five tasks whose name/title or description match."""
        term = (term or "").strip()
        if not term:
            return SearchData(projects=[], tasks=[])

        project_ids = await crud_project.get_accessible_ids(db, user_id=current_user.id)
        projects = await crud_project.search(
            db,
            term=term,
            where=accessible_clause(current_user.id),
            limit=SEARCH_LIMIT,
        )
        tasks = await crud_task.search(
            db,
            term=term,
            where=visibility_clause(project_ids, current_user.id),
            limit=SEARCH_LIMIT,
        )
        return SearchData(
            projects=[ProjectSearchHit.model_validate(p) for p in projects],
            tasks=[TaskSearchHit.model_validate(t) for t in tasks],
        )


analytics_service = AnalyticsService()
