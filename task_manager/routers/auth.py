"""
Authentication router for registration and login.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_manager.core.dependencies import get_auth_service, get_current_user, get_db
from task_manager.models.user import User
from task_manager.schemas.user import AuthResponse, CurrentUserResponse, UserRead
from task_manager.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: Optional[Dict[str, Any]] = Body(None),
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new account and return a JWT access token for it.
    """
    token, user = await auth_service.register(payload or {})
    await db.commit()
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: Optional[Dict[str, Any]] = Body(None),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return JWT access token.
    """
    token, user = await auth_service.login(payload or {})
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserRead.model_validate(user),
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """
    Get information about the currently authenticated user.
    """
    return CurrentUserResponse(user=UserRead.model_validate(current_user))
