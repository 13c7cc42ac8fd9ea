"""
Authentication service for registration, login and token management.
"""

from typing import Any, Optional, Tuple

from task_manager.core.jwt import SessionIssuer
from task_manager.core.security import verify_password
from task_manager.errors import InvalidCredentials, ValidationFailed, field_error
from task_manager.models.user import User
from task_manager.repositories.user_repository import DuplicateUser, UserRepository
from task_manager.schemas.user import LoginRequest, RegisterRequest
from task_manager.validation import LOGIN_FIELD_MESSAGES, USER_FIELD_MESSAGES, validate_payload


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repository: UserRepository, issuer: SessionIssuer):
        self.user_repository = user_repository
        self.issuer = issuer

    async def register(self, payload: Any) -> Tuple[str, User]:
        """
        Create an account and sign the new user in.

        Args:
            payload: Raw request body with username, email, password

        Returns:
            (access token, created user)

        Raises:
            ValidationFailed: invalid fields, or username/email already taken
        """
        data = validate_payload(RegisterRequest, payload, USER_FIELD_MESSAGES)

        existing = await self.user_repository.get_by_username_or_email(data.username, data.email)
        if existing is not None:
            raise self._already_exists(data, existing)

        try:
            user = await self.user_repository.create(data)
        except DuplicateUser:
            # Lost a race with a concurrent registration
            existing = await self.user_repository.get_by_username_or_email(data.username, data.email)
            raise self._already_exists(data, existing) from None
        return self.issuer.issue(user.id), user

    @staticmethod
    def _already_exists(data: RegisterRequest, existing: Optional[User]) -> ValidationFailed:
        path = "username" if existing is not None and existing.email != data.email.lower() else "email"
        return ValidationFailed(
            [field_error(path, "User already exists", getattr(data, path))],
            message="User already exists",
        )

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentials: unknown email or wrong password
        """
        user = await self.user_repository.get_by_email(email)

        if not user or not verify_password(password, user.hashed_password):
            raise InvalidCredentials()

        return user

    async def login(self, payload: Any) -> Tuple[str, User]:
        """
        Perform user login.

        Returns:
            (access token, authenticated user)
        """
        credentials = validate_payload(LoginRequest, payload, LOGIN_FIELD_MESSAGES)
        user = await self.authenticate_user(credentials.email, credentials.password)
        return self.issuer.issue(user.id), user
