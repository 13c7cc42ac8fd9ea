"""
Task repository - database operations for Task.

Every query takes owner_id and filters on it; there is no way to reach a
task row without naming its owner.
"""

from functools import wraps
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.errors import StoreUnavailable
from task_manager.models.task import Task
from task_manager.utils.time import utc_now


def store_operation(func):
    """Report driver / connection failures as StoreUnavailable."""

    @wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            raise StoreUnavailable() from exc

    return wrapper


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @store_operation
    async def insert(self, owner_id: UUID, fields: Dict[str, Any]) -> Task:
        """Create a new task owned by owner_id."""
        task = Task(owner_id=owner_id, **fields)
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        return task

    @store_operation
    async def find_by_id(self, owner_id: UUID, task_id: UUID) -> Optional[Task]:
        """Get a task by ID for a specific owner."""
        result = await self.db.execute(
            select(Task).where(
                Task.id == task_id,
                Task.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    @store_operation
    async def find_all_by_owner(self, owner_id: UUID) -> List[Task]:
        """List an owner's tasks, newest first."""
        result = await self.db.execute(
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        return list(result.scalars().all())

    @store_operation
    async def update_by_id(self, owner_id: UUID, task_id: UUID, patch: Dict[str, Any]) -> Optional[Task]:
        """
        Apply patch to one task in a single UPDATE statement.

        Returns the updated task, or None when no owned task matched.
        """
        values = dict(patch)
        values["updated_at"] = utc_now()
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .values(**values)
            .returning(Task)
            .execution_options(synchronize_session=False)
        )
        task = result.scalar_one_or_none()
        if task is not None:
            await self.db.refresh(task)
        return task

    @store_operation
    async def toggle_completed(self, owner_id: UUID, task_id: UUID) -> Optional[Task]:
        """Flip completed in place, so concurrent toggles never lose a flip."""
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .values(completed=~Task.completed, updated_at=utc_now())
            .returning(Task)
            .execution_options(synchronize_session=False)
        )
        task = result.scalar_one_or_none()
        if task is not None:
            await self.db.refresh(task)
        return task

    @store_operation
    async def delete_by_id(self, owner_id: UUID, task_id: UUID) -> bool:
        """Delete one task. Returns False when no owned task matched."""
        result = await self.db.execute(
            delete(Task)
            .where(Task.id == task_id, Task.owner_id == owner_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
