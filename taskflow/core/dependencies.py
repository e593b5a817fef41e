"""
FastAPI dependency injection functions.
Provides get_db and get_current_user plus the route signature aliases.
"""
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.core.config import settings
from taskflow.core.exceptions import InvalidTokenException, UnauthorizedException
from taskflow.core.security import decode_access_token
from taskflow.crud.user import crud_user
from taskflow.db.session import get_db
from taskflow.models.user import User

# Re-export get_db so routes can import from one place
__all__ = ["get_db", "get_current_user", "DBSession", "CurrentUser"]

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> User:
    """
    Resolve the caller from the bearer token, falling back to the auth cookie
    when no Authorization header is sent.
    """
    if credentials is not None:
        token = credentials.credentials
    else:
        token = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise UnauthorizedException()

    try:
        payload = decode_access_token(token)
        user_id = uuid.UUID(payload["sub"])
    except (JWTError, ValueError):
        raise InvalidTokenException()

    user = await crud_user.get(db, user_id)
    if user is None:
        raise InvalidTokenException()

    return user


# Convenience type aliases for route signatures
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_user)]
