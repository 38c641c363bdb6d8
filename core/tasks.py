"""
Task operations scoped to the calling user.

Every operation on an existing task goes through ``get_owned_task``:
a missing task is ``NotFoundError``, somebody else's task is
``ForbiddenError``.  Creation always stamps the caller as owner.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import CurrentUser
from database import helpers
from database.models import Task
from utils.errors import ForbiddenError, NotFoundError
from utils.schemas import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

TASK_NOT_FOUND_MESSAGE = "Task not found"
TASK_FORBIDDEN_MESSAGE = "You do not have permission to access this task"
TASK_DELETED_MESSAGE = "Task deleted successfully"


async def create_task(session: AsyncSession, caller: CurrentUser, data: TaskCreate) -> Task:
    task = await helpers.create_task(
        session,
        user_id=caller.user_id,
        title=data.title,
        description=data.description,
    )
    logger.info("User %s created task %s", caller.user_id, task.id)
    return task


async def list_tasks(
    session: AsyncSession,
    caller: CurrentUser,
    completed: Optional[bool] = None,
) -> List[Task]:
    return await helpers.list_tasks(session, caller.user_id, completed=completed)


async def get_owned_task(session: AsyncSession, caller: CurrentUser, task_id: int) -> Task:
    task = await helpers.get_task(session, task_id)
    if task is None:
        raise NotFoundError(TASK_NOT_FOUND_MESSAGE)
    if task.user_id != caller.user_id:
        raise ForbiddenError(TASK_FORBIDDEN_MESSAGE)
    return task


async def update_task(
    session: AsyncSession,
    caller: CurrentUser,
    task_id: int,
    data: TaskUpdate,
) -> Task:
    task = await get_owned_task(session, caller, task_id)
    return await helpers.update_task(session, task, data.changes())


async def delete_task(session: AsyncSession, caller: CurrentUser, task_id: int) -> Dict[str, str]:
    task = await get_owned_task(session, caller, task_id)
    await helpers.delete_task(session, task)
    logger.info("User %s deleted task %s", caller.user_id, task_id)
    return {"message": TASK_DELETED_MESSAGE}
