"""
Schemas package.

Import all schemas here for easy access.
"""

from task_manager.schemas.task import (
    TaskCreate,
    TaskDetail,
    TaskEnvelope,
    TaskListResponse,
    TaskRead,
    TaskUpdate,
    MessageResponse,
)
from task_manager.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserRead,
)

__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskRead",
    "TaskDetail",
    "TaskEnvelope",
    "TaskListResponse",
    "MessageResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserRead",
    "AuthResponse",
    "CurrentUserResponse",
]
