"""
User Pydantic schemas.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from task_manager.core.security import PASSWORD_MAX_BYTES, password_fits
from task_manager.utils.time import ensure_utc


class RegisterRequest(BaseModel):
    """Schema for registering a new account. Passwords are taken verbatim."""

    username: Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=30)]
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_within_bcrypt_limit(cls, value: str) -> str:
        if not password_fits(value):
            raise PydanticCustomError(
                "password_too_long",
                "Password cannot exceed {max_bytes} bytes",
                {"max_bytes": PASSWORD_MAX_BYTES},
            )
        return value


class LoginRequest(BaseModel):
    """Schema for login request."""

    email: EmailStr
    password: str = Field(min_length=1)


class UserRead(BaseModel):
    """Schema for reading user data (API response). Never carries the password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID
    username: str
    email: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class AuthResponse(BaseModel):
    """Schema for register / login responses."""

    message: str
    token: str
    user: UserRead


class CurrentUserResponse(BaseModel):
    user: UserRead
