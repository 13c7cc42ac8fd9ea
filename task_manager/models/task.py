"""
Task model.

Represents a to-do item owned by exactly one user.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from task_manager.models.base_model import TimestampedModel


class Task(TimestampedModel):
    """
    Task table - one row per to-do item.
    """

    __tablename__ = "task"

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    description: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    category: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    priority: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default="medium",
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # Listing is always "tasks of one owner, newest first"
    __table_args__ = (
        Index("ix_task_owner_created", "owner_id", "created_at"),
    )
