"""
Task router - API endpoints for tasks.

Every route sits behind get_current_user; handlers only ever see tasks of
the authenticated caller.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.dependencies import get_current_user, get_db, get_task_service
from task_manager.models.user import User
from task_manager.schemas.task import (
    MessageResponse,
    TaskDetail,
    TaskEnvelope,
    TaskListResponse,
    TaskRead,
)
from task_manager.services.task_service import TaskService

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=TaskListResponse)
async def list_tasks(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List the caller's tasks, newest first."""
    tasks = await service.list_tasks(current_user.id)
    return TaskListResponse(
        tasks=[TaskRead.model_validate(task) for task in tasks],
        count=len(tasks),
    )


@router.get("/{task_id}", response_model=TaskDetail)
async def get_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Get a task by ID."""
    task = await service.get_task(current_user.id, task_id)
    return TaskDetail(task=TaskRead.model_validate(task))


@router.post("", response_model=TaskEnvelope, status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Create a new task."""
    task = await service.create_task(current_user.id, payload or {})
    await db.commit()
    return TaskEnvelope(message="Task created successfully", task=TaskRead.model_validate(task))


@router.put("/{task_id}", response_model=TaskEnvelope)
async def update_task(
    task_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Update only the fields present in the body."""
    task = await service.update_task(current_user.id, task_id, payload or {})
    await db.commit()
    return TaskEnvelope(message="Task updated successfully", task=TaskRead.model_validate(task))


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Delete a task."""
    await service.delete_task(current_user.id, task_id)
    await db.commit()
    return MessageResponse(message="Task deleted successfully")


@router.patch("/{task_id}/toggle", response_model=TaskEnvelope)
async def toggle_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Flip a task between completed and uncompleted."""
    task = await service.toggle_task(current_user.id, task_id)
    await db.commit()
    state = "completed" if task.completed else "uncompleted"
    return TaskEnvelope(message=f"Task {state} successfully", task=TaskRead.model_validate(task))
