"""
User CRUD operations.
Extends CRUDBase with user-specific queries.
"""
from __future__ import annotations

import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.crud.base import CRUDBase
from taskflow.models.user import User
from taskflow.schemas.user import ProfileUpdate


class CRUDUser(CRUDBase[User, ProfileUpdate]):

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def get_many(
        self, db: AsyncSession, ids: list[uuid.UUID]
    ) -> list[User]:
        if not ids:
            return []
        result = await db.execute(select(User).where(User.id.in_(ids)))
        return list(result.scalars().all())

    async def email_taken(
        self, db: AsyncSession, *, email: str, exclude_id: uuid.UUID | None = None
    ) -> bool:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        result = await db.execute(query.limit(1))
        return result.first() is not None

    async def create_user(
        self,
        db: AsyncSession,
        *,
        name: str,
        email: str,
        hashed_password: str,
        role: str = "member",
    ) -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            role=role,
        )
        db.add(user)
        await db.flush()
        return user

    async def set_password(
        self, db: AsyncSession, *, user: User, hashed_password: str
    ) -> User:
        user.hashed_password = hashed_password
        db.add(user)
        await db.flush()
        return user

    async def search(self, db: AsyncSession, *, term: str | None = None) -> list[User]:
        """List users sorted by name, optionally matching name or email."""
        query = select(User)
        if term:
            query = query.where(
                or_(
                    User.name.icontains(term, autoescape=True),
                    User.email.icontains(term, autoescape=True),
                )
            )
        result = await db.execute(query.order_by(User.name.asc()))
        return list(result.scalars().all())


crud_user = CRUDUser(User)
