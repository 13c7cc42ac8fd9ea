"""
User repository - database operations for User.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.security import hash_password
from task_manager.models.user import User
from task_manager.repositories.task_repository import store_operation
from task_manager.schemas.user import RegisterRequest


class DuplicateUser(Exception):
    """The unique username or email constraint rejected an insert."""

    def __init__(self, username: str, email: str):
        self.username = username
        self.email = email
        super().__init__(f"user {username!r} / {email!r} already exists")


class UserRepository:
    """Repository for User database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    @store_operation
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive)."""
        if not email or not email.strip():
            return None
        email_clean = email.strip().lower()
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email_clean)
        )
        return result.scalar_one_or_none()

    @store_operation
    async def get_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        """Find any user already holding this username or email."""
        result = await self.db.execute(
            select(User)
            .where(
                or_(
                    User.username == username.strip(),
                    func.lower(User.email) == email.strip().lower(),
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none()

    @store_operation
    async def create(self, data: RegisterRequest) -> User:
        """
        Create a new user with a hashed password.

        Raises:
            DuplicateUser: a concurrent registration took the username or email
        """
        user = User(
            username=data.username,
            email=data.email.strip().lower(),
            hashed_password=hash_password(data.password),
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUser(data.username, data.email) from None
        await self.db.refresh(user)
        return user
