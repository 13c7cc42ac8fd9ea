"""
Task Pydantic schemas.

Request schemas accept the camelCase field names the client sends
(dueDate) as well as the snake_case names; errors are always reported
under the camelCase name. Unknown keys, including _id / user /
createdAt / updatedAt, are ignored.
"""

from datetime import datetime
from typing import Any, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

from task_manager.utils.time import ensure_utc


TaskCategory = Literal["work", "personal", "shopping", "health", "education", "other"]
TaskPriority = Literal["low", "medium", "high"]

DEFAULT_PRIORITY = "medium"

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def parse_due_date(value: Any) -> Optional[datetime]:
    """
    Accept an ISO 8601 date or date-time. Empty values mean "no due date".

    Bare dates and naive date-times are read as UTC. An offset that would
    push the instant outside years 1-9999 is rejected like any bad date.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            raise ValueError("Invalid date format") from None
    if not isinstance(value, datetime):
        raise ValueError("Invalid date format")
    try:
        return ensure_utc(value)
    except OverflowError:
        raise ValueError("Invalid date format") from None


class TaskInput(BaseModel):
    """Shared configuration for task request bodies."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("due_date", mode="before", check_fields=False)
    @classmethod
    def parse_due_date_field(cls, value: Any) -> Optional[datetime]:
        return parse_due_date(value)


class TaskCreate(TaskInput):
    """Schema for creating a new task."""

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    category: Optional[TaskCategory] = None
    priority: TaskPriority = DEFAULT_PRIORITY
    due_date: Optional[datetime] = None


class TaskUpdate(TaskInput):
    """
    Schema for updating a task. Every field is optional.

    Only keys present in the request end up in model_fields_set, so a
    dueDate sent as null clears the stored date while a missing dueDate
    leaves it alone.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    category: Optional[TaskCategory] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    completed: Optional[StrictBool] = None

    @field_validator("title", "priority", "completed", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # These columns cannot be cleared
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict:
        """Column values for the fields the client actually sent."""
        return self.model_dump(include=self.model_fields_set, by_alias=False)


class TaskRead(BaseModel):
    """Schema for reading task data (API response)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: UUID = Field(alias="_id")
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    priority: str
    due_date: Optional[datetime] = None
    completed: bool
    owner_id: UUID = Field(alias="user")
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None


class TaskDetail(BaseModel):
    task: TaskRead


class TaskEnvelope(BaseModel):
    """Single task response after a write."""

    message: str
    task: TaskRead


class TaskListResponse(BaseModel):
    """Response model for task list."""

    tasks: List[TaskRead]
    count: int


class MessageResponse(BaseModel):
    message: str
