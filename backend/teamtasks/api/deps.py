from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from motor.motor_asyncio import AsyncIOMotorDatabase

from teamtasks.api.resolver import OperationResolver
from teamtasks.core.config import settings
from teamtasks.db.mongodb import get_database
from teamtasks.repositories import (
    MembershipRepository,
    TaskRepository,
    TeamRepository,
    UserRepository,
)
from teamtasks.services.authorization import AuthorizationService
from teamtasks.services.notifications.service import NotificationService
from teamtasks.services.tasks import TaskService
from teamtasks.services.teams import TeamService
from teamtasks.services.users import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def build_resolver(
    db: AsyncIOMotorDatabase,
    notifications: Optional[NotificationService] = None,
) -> OperationResolver:
    """Wire repositories and services for one request."""
    notifications = notifications or NotificationService()
    teams = TeamRepository(db)
    memberships = MembershipRepository(db)
    authorization = AuthorizationService(memberships)

    return OperationResolver(
        teams=TeamService(teams, memberships, authorization, notifications),
        tasks=TaskService(TaskRepository(db), teams, authorization, notifications),
        users=UserService(UserRepository(db)),
    )


async def get_resolver(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> OperationResolver:
    return build_resolver(db)


def decode_identity_token(token: str) -> Dict[str, Any]:
    """
    Verify a bearer token and return its claims.

    Raises:
        JWTError: If the signature, expiry or audience check fails
    """
    options = {"verify_aud": settings.TOKEN_AUDIENCE is not None}
    return jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[settings.ALGORITHM],
        audience=settings.TOKEN_AUDIENCE,
        options=options,
    )


async def get_identity_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Dict[str, Any]:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception
    try:
        return decode_identity_token(credentials.credentials)
    except JWTError:
        raise credentials_exception
