"""
TaskService tests against a real (SQLite) store.

Each test runs its async body through the run_with_db fixture, which
hands over an open session plus two users, alice and bob.
"""

import uuid
from datetime import datetime, timezone

import pytest

from task_manager.errors import InvalidIdentifier, NotFound, ValidationFailed
from task_manager.repositories.task_repository import TaskRepository
from task_manager.services.task_service import TaskService

pytestmark = pytest.mark.unit


def service_for(session):
    return TaskService(TaskRepository(session))


def test_create_sets_owner_and_defaults(run_with_db):
    async def body(session, alice, bob):
        task = await service_for(session).create_task(alice.id, {"title": "  Buy milk ", "priority": "low"})

        assert task.title == "Buy milk"
        assert task.owner_id == alice.id
        assert task.completed is False
        assert task.priority == "low"
        assert task.created_at is not None
        assert task.updated_at is not None

    run_with_db(body)


def test_create_without_priority_stores_medium(run_with_db):
    async def body(session, alice, bob):
        task = await service_for(session).create_task(alice.id, {"title": "Stretch"})
        assert task.priority == "medium"

    run_with_db(body)


def test_create_ignores_client_completed_flag(run_with_db):
    async def body(session, alice, bob):
        task = await service_for(session).create_task(alice.id, {"title": "Stretch", "completed": True})
        assert task.completed is False

    run_with_db(body)


def test_create_with_blank_title_stores_nothing(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)

        with pytest.raises(ValidationFailed) as exc_info:
            await service.create_task(alice.id, {"title": "   "})

        assert [entry["path"] for entry in exc_info.value.errors] == ["title"]
        assert await service.list_tasks(alice.id) == []

    run_with_db(body)


def test_list_returns_own_tasks_newest_first(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        for title in ("first", "second", "third"):
            await service.create_task(alice.id, {"title": title})
        await service.create_task(bob.id, {"title": "bob's"})

        tasks = await service.list_tasks(alice.id)

        assert [task.title for task in tasks] == ["third", "second", "first"]
        assert all(task.owner_id == alice.id for task in tasks)

    run_with_db(body)


def test_list_is_empty_for_new_user(run_with_db):
    async def body(session, alice, bob):
        assert await service_for(session).list_tasks(alice.id) == []

    run_with_db(body)


def test_update_completed_only_leaves_other_fields(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        created = await service.create_task(alice.id, {
            "title": "Report",
            "description": "Quarterly numbers",
            "category": "work",
            "priority": "high",
            "dueDate": "2026-11-30T17:00:00Z",
        })
        before = (created.title, created.description, created.category, created.priority, created.due_date)

        updated = await service.update_task(alice.id, created.id, {"completed": True})

        assert updated.completed is True
        after = (updated.title, updated.description, updated.category, updated.priority, updated.due_date)
        assert after[:4] == before[:4]
        assert after[4].replace(tzinfo=timezone.utc) == datetime(2026, 11, 30, 17, 0, tzinfo=timezone.utc)

    run_with_db(body)


def test_update_refreshes_updated_at_and_keeps_identity(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        created = await service.create_task(alice.id, {"title": "Report"})
        created_at, updated_at = created.created_at, created.updated_at

        updated = await service.update_task(alice.id, str(created.id), {
            "title": "Report v2",
            "_id": str(uuid.uuid4()),
            "user": str(bob.id),
            "owner_id": str(bob.id),
            "createdAt": "2001-01-01",
        })

        assert updated.id == created.id
        assert updated.owner_id == alice.id
        assert updated.title == "Report v2"
        assert updated.created_at == created_at
        assert updated.updated_at > updated_at

    run_with_db(body)


def test_update_clears_due_date_only_when_sent_empty(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        task = await service.create_task(alice.id, {"title": "Dentist", "dueDate": "2026-11-02"})

        task = await service.update_task(alice.id, task.id, {"title": "Dentist appointment"})
        assert task.due_date is not None

        task = await service.update_task(alice.id, task.id, {"dueDate": None})
        assert task.due_date is None

    run_with_db(body)


def test_update_validation_errors_leave_task_untouched(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        task = await service.create_task(alice.id, {"title": "Keep me"})

        with pytest.raises(ValidationFailed) as exc_info:
            await service.update_task(alice.id, task.id, {"title": "", "priority": "urgent"})

        assert sorted(entry["path"] for entry in exc_info.value.errors) == ["priority", "title"]
        assert (await service.get_task(alice.id, task.id)).title == "Keep me"

    run_with_db(body)


def test_toggle_twice_restores_original_state(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        task = await service.create_task(alice.id, {"title": "Flip"})

        first = await service.toggle_task(alice.id, task.id)
        assert first.completed is True

        second = await service.toggle_task(alice.id, task.id)
        assert second.completed is False

    run_with_db(body)


def test_delete_then_get_is_not_found(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        task = await service.create_task(alice.id, {"title": "Temporary"})

        await service.delete_task(alice.id, task.id)

        with pytest.raises(NotFound):
            await service.get_task(alice.id, task.id)
        with pytest.raises(NotFound):
            await service.delete_task(alice.id, task.id)

    run_with_db(body)


def test_other_users_task_is_never_visible(run_with_db):
    async def body(session, alice, bob):
        service = service_for(session)
        task = await service.create_task(alice.id, {"title": "Private"})

        with pytest.raises(NotFound):
            await service.get_task(bob.id, task.id)
        with pytest.raises(NotFound):
            await service.update_task(bob.id, task.id, {"title": "Hijacked"})
        with pytest.raises(NotFound):
            await service.toggle_task(bob.id, task.id)
        with pytest.raises(NotFound):
            await service.delete_task(bob.id, task.id)

        untouched = await service.get_task(alice.id, task.id)
        assert untouched.title == "Private"
        assert untouched.completed is False

    run_with_db(body)


@pytest.mark.parametrize("bad_id", ["123", "not-an-id", ""])
def test_malformed_ids_are_invalid_identifier(run_with_db, bad_id):
    async def body(session, alice, bob):
        service = service_for(session)

        with pytest.raises(InvalidIdentifier):
            await service.get_task(alice.id, bad_id)
        with pytest.raises(InvalidIdentifier):
            await service.update_task(alice.id, bad_id, {"title": "x"})
        with pytest.raises(InvalidIdentifier):
            await service.toggle_task(alice.id, bad_id)
        with pytest.raises(InvalidIdentifier):
            await service.delete_task(alice.id, bad_id)

    run_with_db(body)


def test_unknown_well_formed_id_is_not_found(run_with_db):
    async def body(session, alice, bob):
        with pytest.raises(NotFound):
            await service_for(session).get_task(alice.id, uuid.uuid4())

    run_with_db(body)
