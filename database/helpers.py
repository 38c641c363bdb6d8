"""
Database helper functions — user credentials and task persistence.

Every function takes the caller's ``AsyncSession``; transaction boundaries
belong to the session dependency.  Writes flush so generated ids and
timestamps are populated before returning.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Task, User
from utils.errors import ConflictError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"

MAX_ROW_ID = 2**31 - 1

_UPDATABLE_TASK_FIELDS = ("title", "description", "completed")


# ── Users ───────────────────────────────────────────────────────────


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def create_user(session: AsyncSession, email: str, password_hash: str) -> User:
    """
    Insert a user row.

    The unique index on ``users.email`` is the final arbiter: a concurrent
    registration that slipped past the existence check surfaces here as
    ``ConflictError`` rather than a duplicate row.
    """
    user = User(email=email, password_hash=password_hash)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE) from exc
    await session.refresh(user)
    return user


# ── Tasks ───────────────────────────────────────────────────────────


async def create_task(
    session: AsyncSession,
    user_id: int,
    title: str,
    description: Optional[str] = None,
) -> Task:
    task = Task(title=title, description=description, completed=False, user_id=user_id)
    session.add(task)
    await session.flush()
    await session.refresh(task)
    return task


async def list_tasks(
    session: AsyncSession,
    user_id: int,
    completed: Optional[bool] = None,
) -> List[Task]:
    """Tasks owned by ``user_id``, newest first, optionally by ``completed``."""
    stmt = select(Task).where(Task.user_id == user_id)
    if completed is not None:
        stmt = stmt.where(Task.completed == completed)
    stmt = stmt.order_by(Task.created_at.desc(), Task.id.desc())
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_task(session: AsyncSession, task_id: int) -> Optional[Task]:
    # Ids outside the INTEGER column range cannot exist; drivers raise on them.
    if not 1 <= task_id <= MAX_ROW_ID:
        return None
    return await session.get(Task, task_id)


async def update_task(session: AsyncSession, task: Task, changes: Dict[str, Any]) -> Task:
    """Apply ``changes`` (a subset of title/description/completed) to ``task``."""
    for field, value in changes.items():
        if field in _UPDATABLE_TASK_FIELDS:
            setattr(task, field, value)
    await session.flush()
    await session.refresh(task)
    return task


async def delete_task(session: AsyncSession, task: Task) -> None:
    await session.delete(task)
    await session.flush()
