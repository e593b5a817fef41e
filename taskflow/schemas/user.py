"""
User Pydantic schemas.
Covers registration, login, profile reads/updates, and the auth payload.
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field


def _normalize_email(v: object) -> object:
    return v.strip().lower() if isinstance(v, str) else v


# Emails are stored lower-cased so uniqueness is case-insensitive
Email = Annotated[EmailStr, BeforeValidator(_normalize_email)]


# ── Requests ──────────────────────────────────────────────────────────────────

class UserCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100)
    email: Email
    password: str = Field(min_length=6, max_length=128)


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: Email | None = None


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


# ── Read ──────────────────────────────────────────────────────────────────────

class UserRead(BaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: str
    avatar: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserReadPublic(BaseModel):
    """Minimal profile embedded in project, task, and comment responses."""

    id: uuid.UUID
    name: str
    email: str
    avatar: str | None = None

    model_config = {"from_attributes": True}


class UserStats(BaseModel):
    project_count: int
    task_count: int
    completed_task_count: int


# ── Envelope payloads ─────────────────────────────────────────────────────────

class AuthData(BaseModel):
    user: UserRead
    token: str


class UserData(BaseModel):
    user: UserRead


class UserListData(BaseModel):
    users: list[UserRead]
    count: int


class UserDetailData(BaseModel):
    user: UserRead
    stats: UserStats
