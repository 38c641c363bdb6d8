"""
REST API routes for tasks and the user profile.

All routes here require a Bearer token; the verified identity arrives
through ``get_current_user`` and is passed down explicitly.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import CurrentUser, get_current_user
from core import tasks as task_ops
from core.users import get_profile
from database.session import get_db_session
from utils.schemas import (
    Envelope,
    MessageOut,
    ProfileOut,
    ProfileTaskOut,
    TaskCreate,
    TaskOut,
    TaskUpdate,
    UserOut,
)

tasks_router = APIRouter(tags=["tasks"])
users_router = APIRouter(tags=["users"])


def _ok(data: Any) -> Dict[str, Any]:
    return {"success": True, "data": data}


# ── Tasks ──────────────────────────────────────────────────────────────


@tasks_router.post(
    "",
    response_model=Envelope[TaskOut],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
)
async def create_task(
    body: TaskCreate,
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    task = await task_ops.create_task(session, caller, body)
    return _ok(TaskOut.model_validate(task))


@tasks_router.get(
    "",
    response_model=Envelope[List[TaskOut]],
    summary="Get all tasks for authenticated user",
)
async def list_tasks(
    completed: Optional[Literal["true", "false"]] = Query(None),
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    flag = None if completed is None else completed == "true"
    tasks = await task_ops.list_tasks(session, caller, completed=flag)
    return _ok([TaskOut.model_validate(t) for t in tasks])


@tasks_router.get(
    "/{task_id}",
    response_model=Envelope[TaskOut],
    summary="Get a task by ID",
)
async def get_task(
    task_id: int,
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    task = await task_ops.get_owned_task(session, caller, task_id)
    return _ok(TaskOut.model_validate(task))


@tasks_router.put(
    "/{task_id}",
    response_model=Envelope[TaskOut],
    summary="Update a task",
)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    task = await task_ops.update_task(session, caller, task_id, body)
    return _ok(TaskOut.model_validate(task))


@tasks_router.delete(
    "/{task_id}",
    response_model=Envelope[MessageOut],
    summary="Delete a task",
)
async def delete_task(
    task_id: int,
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    result = await task_ops.delete_task(session, caller, task_id)
    return _ok(result)


# ── Users ──────────────────────────────────────────────────────────────


@users_router.get(
    "/me",
    response_model=Envelope[ProfileOut],
    summary="Get authenticated user profile",
)
async def me(
    caller: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> Dict[str, Any]:
    profile = await get_profile(session, caller)
    data = UserOut.model_validate(profile.user).model_dump()
    data["tasks"] = [ProfileTaskOut.model_validate(t) for t in profile.tasks]
    return _ok(ProfileOut(**data))
