"""
Authentication service.
Handles registration, login, profile edits, and password changes.
Business logic lives here; routes only call these methods.
"""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.exceptions import BadRequestException, UnauthorizedException
from taskflow.core.security import create_access_token, hash_password, verify_password
from taskflow.crud.user import crud_user
from taskflow.models.user import User
from taskflow.schemas.user import AuthData, PasswordChange, ProfileUpdate, UserCreate, UserRead

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(str(user.id), user.email, user.name)


class AuthService:

    async def register_user(
        self, db: AsyncSession, *, user_in: UserCreate
    ) -> AuthData:
        """
        Register a new user and sign them in.
        Rejects an email that is already registered.
        """
        if await crud_user.email_taken(db, email=user_in.email):
            raise BadRequestException("User with this email already exists")

        user = await crud_user.create_user(
            db,
            name=user_in.name,
            email=user_in.email,
            hashed_password=hash_password(user_in.password),
        )
        logger.info("Registered user %s", user.id)

        return AuthData(user=UserRead.model_validate(user), token=issue_token(user))

    async def authenticate_user(
        self, db: AsyncSession, *, email: str, password: str
    ) -> AuthData:
        """Verify credentials. Unknown email and wrong password look the same."""
        user = await crud_user.get_by_email(db, email)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedException("Invalid email or password")

        return AuthData(user=UserRead.model_validate(user), token=issue_token(user))

    async def update_profile(
        self, db: AsyncSession, *, user: User, profile_in: ProfileUpdate
    ) -> User:
        data = profile_in.model_dump(exclude_unset=True)
        data = {field: value for field, value in data.items() if value is not None}

        email = data.get("email")
        if email and await crud_user.email_taken(db, email=email, exclude_id=user.id):
            raise BadRequestException("Email already in use")

        return await crud_user.update(db, db_obj=user, obj_in=data)

    async def change_password(
        self, db: AsyncSession, *, user: User, password_in: PasswordChange
    ) -> None:
        if not verify_password(password_in.current_password, user.hashed_password):
            raise BadRequestException("Current password is incorrect")

        await crud_user.set_password(
            db, user=user, hashed_password=hash_password(password_in.new_password)
        )
        logger.info("Password changed for user %s", user.id)


auth_service = AuthService()
