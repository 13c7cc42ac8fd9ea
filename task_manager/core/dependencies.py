"""
FastAPI dependencies for the application.

The Database and SessionIssuer live on app.state; they are built once by
create_app() and never imported as module globals by request code.
"""

import logging
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.jwt import SessionIssuer
from task_manager.errors import InvalidToken, MissingToken
from task_manager.models.user import User
from task_manager.repositories.task_repository import TaskRepository
from task_manager.repositories.user_repository import UserRepository
from task_manager.services.auth_service import AuthService
from task_manager.services.task_service import TaskService

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get a database session for one request."""
    async with request.app.state.db.session() as session:
        yield session


def get_issuer(request: Request) -> SessionIssuer:
    return request.app.state.issuer


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of an Authorization header, or None."""
    if not authorization:
        return None
    value = authorization.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == BEARER_SCHEME:
        value = credentials.strip()
    return value or None


async def get_current_user(
    authorization: Optional[str] = Header(None),
    issuer: SessionIssuer = Depends(get_issuer),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Resolve the authenticated user from the bearer token.

    Raises:
        MissingToken: no Authorization header or empty token
        InvalidToken / ExpiredToken: token rejected, or its user no longer exists
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise MissingToken()

    user_id = issuer.verify(token)

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        logger.info("Token for unknown user %s rejected", user_id)
        raise InvalidToken()

    return user


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    return TaskService(TaskRepository(db))


def get_auth_service(
    db: AsyncSession = Depends(get_db),
    issuer: SessionIssuer = Depends(get_issuer),
) -> AuthService:
    return AuthService(UserRepository(db), issuer)
