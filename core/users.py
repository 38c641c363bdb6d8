"""
Profile of the authenticated user.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from auth.dependencies import CurrentUser
from database import helpers
from database.models import Task, User
from utils.errors import NotFoundError


@dataclass
class Profile:
    user: User
    tasks: List[Task]


async def get_profile(session: AsyncSession, caller: CurrentUser) -> Profile:
    # A valid token can outlive its user row.
    user = await helpers.get_user_by_id(session, caller.user_id)
    if user is None:
        raise NotFoundError("User not found")
    tasks = await helpers.list_tasks(session, user.id)
    return Profile(user=user, tasks=tasks)
