"""
Project business logic service.
Scopes reads to owner/members, restricts deletion to the owner, and runs the
cascade delete.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import BadRequestException, NotFoundException
from taskflow.crud.project import crud_project
from taskflow.crud.user import crud_user
from taskflow.models.project import Project
from taskflow.models.user import User
from taskflow.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from taskflow.services.access import require_project_access
from taskflow.services.activity_service import activity_service


class ProjectService:

    async def list_projects(
        self,
        db: AsyncSession,
        *,
        current_user: User,
        status: str | None = None,
    ) -> list[ProjectRead]:
        """Projects the user owns or belongs to, newest first, with task counts."""
        projects = await crud_project.list_accessible(
            db, user_id=current_user.id, status=status
        )
        counts = await crud_project.task_counts(db, [p.id for p in projects])
        return [self._to_read(p, counts.get(p.id, (0, 0))) for p in projects]

    async def get_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        current_user: User,
    ) -> ProjectRead:
        project = await require_project_access(db, project_id=project_id, user=current_user)
        counts = await crud_project.task_counts(db, [project.id])
        return self._to_read(project, counts.get(project.id, (0, 0)))

    async def create_project(
        self,
        db: AsyncSession,
        *,
        project_in: ProjectCreate,
        current_user: User,
    ) -> ProjectRead:
        """Create a project owned by the caller. Listed members must exist."""
        members = await self._resolve_members(
            db, member_ids=project_in.members, owner_id=current_user.id
        )
        project = await crud_project.create_project(
            db, obj_in=project_in, owner_id=current_user.id, members=members
        )

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="created",
            entity_type="project",
            entity_id=project.id,
            entity_name=project.name,
            project_id=project.id,
        )

        created = await crud_project.get_with_relations(db, project.id)
        return self._to_read(created, (0, 0))  # type: ignore[arg-type]

    async def update_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        project_in: ProjectUpdate,
        current_user: User,
    ) -> ProjectRead:
        """Owner or any member may update; a members list replaces the set."""
        project = await crud_project.get_accessible(
            db, project_id=project_id, user_id=current_user.id
        )
        if project is None:
            raise NotFoundException(
                "Project",
                "Project not found or you do not have permission to update it",
            )

        data = project_in.model_dump(exclude_unset=True, exclude={"members"})
        data = {field: value for field, value in data.items() if value is not None}
        if project_in.members is not None:
            project.members = await self._resolve_members(
                db, member_ids=project_in.members, owner_id=project.owner_id
            )
        await crud_project.update(db, db_obj=project, obj_in=data)

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="updated",
            entity_type="project",
            entity_id=project.id,
            entity_name=project.name,
            project_id=project.id,
        )

        updated = await crud_project.get_with_relations(db, project.id)
        counts = await crud_project.task_counts(db, [project.id])
        return self._to_read(updated, counts.get(project.id, (0, 0)))  # type: ignore[arg-type]

    async def delete_project(
        self,
        db: AsyncSession,
        *,
        project_id: uuid.UUID,
        current_user: User,
    ) -> dict[str, int]:
        """
        Only the exact owner may delete. Members get the same 404 as strangers.
        The deletion entry is written after the cascade and carries no
        project id, so the cascade cannot remove it.
        """
        project = await crud_project.get_owned(
            db, project_id=project_id, owner_id=current_user.id
        )
        if project is None:
            raise NotFoundException(
                "Project",
                "Project not found or you do not have permission to delete it",
            )

        name = project.name
        counts = await crud_project.delete_cascade(db, project=project)

        await activity_service.log(
            db,
            user_id=current_user.id,
            action="deleted",
            entity_type="project",
            entity_id=project_id,
            entity_name=name,
        )
        return counts

    # ── Private helpers ───────────────────────────────────────────────────────

    async def _resolve_members(
        self,
        db: AsyncSession,
        *,
        member_ids: list[uuid.UUID],
        owner_id: uuid.UUID,
    ) -> list[User]:
        wanted = {member_id for member_id in member_ids if member_id != owner_id}
        users = await crud_user.get_many(db, list(wanted))
        missing = wanted - {user.id for user in users}
        if missing:
            raise BadRequestException(
                "Validation error",
                errors=[
                    {"field": "members", "message": f"Unknown user id: {member_id}"}
                    for member_id in sorted(missing, key=str)
                ],
            )
        return users

    @staticmethod
    def _to_read(project: Project, counts: tuple[int, int]) -> ProjectRead:
        read = ProjectRead.model_validate(project)
        read.task_count, read.completed_task_count = counts
        return read


project_service = ProjectService()
