"""
Authentication routes.
POST /auth/register, /auth/login; GET /auth/me; PUT /auth/profile, /auth/password
"""
from __future__ import annotations

from fastapi import APIRouter, Request, status

from taskflow.core.config import settings
from taskflow.core.dependencies import CurrentUser, DBSession
from taskflow.core.rate_limit import limiter
from taskflow.schemas.response import APIResponse, MessageResponse
from taskflow.schemas.user import (
    AuthData,
    LoginRequest,
    PasswordChange,
    ProfileUpdate,
    UserCreate,
    UserData,
    UserRead,
)
from taskflow.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=APIResponse[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user account",
)
async def register(
    user_in: UserCreate,
    db: DBSession,
) -> APIResponse[AuthData]:
    data = await auth_service.register_user(db, user_in=user_in)
    return APIResponse(message="User registered successfully", data=data)


@router.post(
    "/login",
    response_model=APIResponse[AuthData],
    summary="Authenticate and receive a JWT",
)
@limiter.limit(settings.RATE_LIMIT_LOGIN)
async def login(
    request: Request,
    credentials: LoginRequest,
    db: DBSession,
) -> APIResponse[AuthData]:
    data = await auth_service.authenticate_user(
        db, email=credentials.email, password=credentials.password
    )
    return APIResponse(message="Login successful", data=data)


@router.get("/me", response_model=APIResponse[UserData], summary="Get current user")
async def me(current_user: CurrentUser) -> APIResponse[UserData]:
    return APIResponse(data=UserData(user=UserRead.model_validate(current_user)))


@router.put(
    "/profile",
    response_model=APIResponse[UserData],
    summary="Update current user name or email",
)
async def update_profile(
    profile_in: ProfileUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> APIResponse[UserData]:
    user = await auth_service.update_profile(
        db, user=current_user, profile_in=profile_in
    )
    return APIResponse(
        message="Profile updated successfully",
        data=UserData(user=UserRead.model_validate(user)),
    )


@router.put(
    "/password",
    response_model=MessageResponse,
    summary="Change current user password",
)
async def change_password(
    body: PasswordChange,
    current_user: CurrentUser,
    db: DBSession,
) -> MessageResponse:
    await auth_service.change_password(db, user=current_user, password_in=body)
    return MessageResponse(message="Password changed successfully")
