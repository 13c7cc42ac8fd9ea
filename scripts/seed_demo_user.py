"""
Seed script to create a demo user with a few tasks.

Usage:
    python scripts/seed_demo_user.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import task_manager modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from task_manager.core.config import settings
from task_manager.db.session import Database
from task_manager.repositories.task_repository import TaskRepository
from task_manager.repositories.user_repository import UserRepository
from task_manager.schemas.user import RegisterRequest
from task_manager.services.task_service import TaskService

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo123"

DEMO_TASKS = [
    {"title": "Buy milk", "category": "shopping", "priority": "low"},
    {"title": "Finish quarterly report", "category": "work", "priority": "high", "dueDate": "2026-12-15"},
    {"title": "Book dentist appointment", "category": "health"},
]


async def seed_demo_user() -> None:
    database = Database(settings.DATABASE_URL)
    await database.create_all()

    try:
        async with database.session() as db:
            users = UserRepository(db)
            user = await users.get_by_email(DEMO_EMAIL)

            if user:
                print(f"[OK] Demo user already exists: {user.email}")
                return

            user = await users.create(
                RegisterRequest(username="demo", email=DEMO_EMAIL, password=DEMO_PASSWORD)
            )
            service = TaskService(TaskRepository(db))
            for fields in DEMO_TASKS:
                await service.create_task(user.id, fields)

            print(f"[OK] Created demo user {user.email} (password: {DEMO_PASSWORD})")
            print(f"[OK] Created {len(DEMO_TASKS)} tasks")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(seed_demo_user())
