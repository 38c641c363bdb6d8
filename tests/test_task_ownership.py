"""
Tests for task operations and the ownership guard.
"""

from datetime import timedelta

import pytest

from core import tasks as task_ops
from utils.errors import ForbiddenError, NotFoundError
from utils.schemas import TaskCreate, TaskUpdate


class TestCreateAndList:
    @pytest.mark.asyncio
    async def test_create_stamps_caller_as_owner(self, session, make_user):
        alice = await make_user("alice@x.com")
        task = await task_ops.create_task(session, alice, TaskCreate(title="T"))

        assert task.user_id == alice.user_id
        assert task.completed is False
        assert task.description is None

    @pytest.mark.asyncio
    async def test_owner_field_in_body_is_ignored(self, session, make_user):
        alice = await make_user("alice@x.com")
        bob = await make_user("bob@x.com")
        body = TaskCreate.model_validate({"title": "T", "userId": bob.user_id, "user_id": bob.user_id})

        task = await task_ops.create_task(session, alice, body)
        assert task.user_id == alice.user_id

    @pytest.mark.asyncio
    async def test_list_is_scoped_and_newest_first(self, session, make_user):
        alice = await make_user("alice@x.com")
        bob = await make_user("bob@x.com")
        first = await task_ops.create_task(session, alice, TaskCreate(title="first"))
        second = await task_ops.create_task(session, alice, TaskCreate(title="second"))
        await task_ops.create_task(session, bob, TaskCreate(title="bob's"))

        listed = await task_ops.list_tasks(session, alice)
        assert [t.id for t in listed] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_completed_filter(self, session, make_user):
        alice = await make_user("alice@x.com")
        open_task = await task_ops.create_task(session, alice, TaskCreate(title="open"))
        done = await task_ops.create_task(session, alice, TaskCreate(title="done"))
        await task_ops.update_task(session, alice, done.id, TaskUpdate(completed=True))

        only_done = await task_ops.list_tasks(session, alice, completed=True)
        only_open = await task_ops.list_tasks(session, alice, completed=False)
        both = await task_ops.list_tasks(session, alice)

        assert [t.id for t in only_done] == [done.id]
        assert [t.id for t in only_open] == [open_task.id]
        assert {t.completed for t in both} == {True, False}


class TestOwnershipGuard:
    @pytest.mark.asyncio
    async def test_missing_task_is_not_found(self, session, make_user):
        alice = await make_user("alice@x.com")
        with pytest.raises(NotFoundError, match="Task not found"):
            await task_ops.get_owned_task(session, alice, 999999)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("task_id", [0, -5, 2**31, 2**70])
    async def test_out_of_range_id_is_not_found(self, session, make_user, task_id):
        alice = await make_user("alice@x.com")
        with pytest.raises(NotFoundError, match="Task not found"):
            await task_ops.get_owned_task(session, alice, task_id)

    @pytest.mark.asyncio
    async def test_other_users_task_is_forbidden_for_every_operation(self, session, make_user):
        alice = await make_user("alice@x.com")
        bob = await make_user("bob@x.com")
        task = await task_ops.create_task(session, alice, TaskCreate(title="mine"))

        with pytest.raises(ForbiddenError):
            await task_ops.get_owned_task(session, bob, task.id)
        with pytest.raises(ForbiddenError):
            await task_ops.update_task(session, bob, task.id, TaskUpdate(title="stolen"))
        with pytest.raises(ForbiddenError):
            await task_ops.delete_task(session, bob, task.id)

        still_there = await task_ops.get_owned_task(session, alice, task.id)
        assert still_there.title == "mine"

    @pytest.mark.asyncio
    async def test_owner_can_delete(self, session, make_user):
        alice = await make_user("alice@x.com")
        task = await task_ops.create_task(session, alice, TaskCreate(title="bye"))

        result = await task_ops.delete_task(session, alice, task.id)
        assert result == {"message": "Task deleted successfully"}
        with pytest.raises(NotFoundError):
            await task_ops.get_owned_task(session, alice, task.id)


class TestPartialUpdate:
    @pytest.mark.asyncio
    async def test_title_only_keeps_other_fields(self, session, make_user):
        alice = await make_user("alice@x.com")
        task = await task_ops.create_task(
            session, alice, TaskCreate(title="old", description="keep me"),
        )
        await task_ops.update_task(session, alice, task.id, TaskUpdate(completed=True))

        updated = await task_ops.update_task(session, alice, task.id, TaskUpdate(title="new"))
        assert updated.title == "new"
        assert updated.description == "keep me"
        assert updated.completed is True

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, session, make_user):
        alice = await make_user("alice@x.com")
        task = await task_ops.create_task(
            session, alice, TaskCreate(title="t", description="something"),
        )
        updated = await task_ops.update_task(
            session, alice, task.id, TaskUpdate.model_validate({"description": None}),
        )
        assert updated.description is None
        assert updated.title == "t"

    def test_explicit_null_title_is_invalid(self):
        with pytest.raises(ValueError):
            TaskUpdate.model_validate({"title": None})

    def test_unset_fields_are_not_changes(self):
        assert TaskUpdate.model_validate({"completed": False}).changes() == {"completed": False}

    def test_owner_and_unknown_fields_are_not_changes(self):
        body = TaskUpdate.model_validate({"userId": 5, "user_id": 5, "bogus": 1, "title": "t"})
        assert body.changes() == {"title": "t"}

    @pytest.mark.asyncio
    async def test_timestamps_read_back_as_utc(self, session, make_user):
        alice = await make_user("alice@x.com")
        task = await task_ops.create_task(session, alice, TaskCreate(title="t"))
        session.expire_all()

        reloaded = await task_ops.get_owned_task(session, alice, task.id)
        assert reloaded.created_at.utcoffset() == timedelta(0)
        assert reloaded.updated_at.utcoffset() == timedelta(0)
