"""Health check router."""

from fastapi import APIRouter

from task_manager.utils.time import utc_now_iso

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness probe. Does not touch the database."""
    return {
        "message": "Task Manager API is running",
        "timestamp": utc_now_iso(),
    }
