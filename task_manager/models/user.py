"""
User model for authentication.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.models.base_model import TimestampedModel


class User(TimestampedModel):
    """
    User table - registered accounts that own tasks.

    Username and email are each unique across the whole system.
    """

    __tablename__ = "user"

    username: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        unique=True,
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
