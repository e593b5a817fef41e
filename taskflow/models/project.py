"""
Project ORM model and the project_members association table.
A project has exactly one owner and any number of members; the owner is
never stored in project_members.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, String, Table, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskflow.core.time_utils import utc_now
from taskflow.db.base import Base

project_members = Table(
    "project_members",
    Base.metadata,
    Column(
        "project_id",
        Uuid,
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "user_id",
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("ix_project_members_user_id", "user_id"),
)


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(
        String(1000), nullable=False, default="", server_default=""
    )
    status: Mapped[str] = mapped_column(
        Enum("active", "completed", "archived", name="project_status_enum"),
        nullable=False,
        default="active",
        server_default="active",
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(20), nullable=False, default="#6366f1", server_default="#6366f1"
    )
    icon: Mapped[str] = mapped_column(
        String(50), nullable=False, default="folder", server_default="folder"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
        onupdate=utc_now,
    )

    # ── Relationships ─────────────────────────────────────────────────────────
    owner: Mapped["User"] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "User",
        lazy="selectin",
    )
    members: Mapped[list["User"]] = relationship(  # type: ignore[name-defined]  # noqa: F821
        "User",
        secondary=project_members,
        lazy="selectin",
        order_by="User.name",
    )

    __table_args__ = (Index("ix_projects_owner_id_status", "owner_id", "status"),)

    @property
    def member_ids(self) -> set[uuid.UUID]:
        return {member.id for member in self.members}

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} status={self.status}>"
