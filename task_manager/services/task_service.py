"""
Task business logic service.

Every operation is scoped to the caller: owner_id comes from the access
guard and is passed through to every repository call. The service raises
typed errors and leaves logging and HTTP mapping to the routers.
"""

from typing import Any, List
from uuid import UUID

from task_manager.errors import InvalidIdentifier, NotFound
from task_manager.models.task import Task
from task_manager.repositories.task_repository import TaskRepository
from task_manager.schemas.task import TaskCreate, TaskUpdate
from task_manager.validation import TASK_FIELD_MESSAGES, validate_payload


def parse_task_id(task_id: Any) -> UUID:
    """Parse a path identifier. Malformed ids are a client error, not a miss."""
    if isinstance(task_id, UUID):
        return task_id
    try:
        return UUID(str(task_id))
    except ValueError:
        raise InvalidIdentifier() from None


class TaskService:
    """Service for task business logic."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    async def list_tasks(self, owner_id: UUID) -> List[Task]:
        """List the caller's tasks, newest first."""
        return await self.repository.find_all_by_owner(owner_id)

    async def get_task(self, owner_id: UUID, task_id: Any) -> Task:
        """Get one of the caller's tasks."""
        task = await self.repository.find_by_id(owner_id, parse_task_id(task_id))
        if task is None:
            raise NotFound()
        return task

    async def create_task(self, owner_id: UUID, payload: Any) -> Task:
        """
        Validate payload and store a new task.

        New tasks always start uncompleted; priority falls back to medium.

        Raises:
            ValidationFailed: one entry per violated field
        """
        data = validate_payload(TaskCreate, payload, TASK_FIELD_MESSAGES)
        fields = data.model_dump(by_alias=False)
        fields["completed"] = False
        return await self.repository.insert(owner_id, fields)

    async def update_task(self, owner_id: UUID, task_id: Any, payload: Any) -> Task:
        """
        Apply a partial update.

        Only fields present in payload change. Identity, owner and
        timestamps are never taken from the client.

        Raises:
            InvalidIdentifier, ValidationFailed, NotFound
        """
        task_uuid = parse_task_id(task_id)
        data = validate_payload(TaskUpdate, payload, TASK_FIELD_MESSAGES)
        task = await self.repository.update_by_id(owner_id, task_uuid, data.changes())
        if task is None:
            raise NotFound()
        return task

    async def delete_task(self, owner_id: UUID, task_id: Any) -> None:
        """Delete one of the caller's tasks. A second delete is NotFound."""
        deleted = await self.repository.delete_by_id(owner_id, parse_task_id(task_id))
        if not deleted:
            raise NotFound()

    async def toggle_task(self, owner_id: UUID, task_id: Any) -> Task:
        """Flip the completed flag of one of the caller's tasks."""
        task = await self.repository.toggle_completed(owner_id, parse_task_id(task_id))
        if task is None:
            raise NotFound()
        return task
