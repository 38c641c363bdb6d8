"""
Auth API routes — register, login.

Route prefix: /api/auth
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import service
from auth.dependencies import get_settings
from config.settings import Settings
from database.session import get_db_session
from utils.schemas import AuthData, Envelope, LoginRequest, RegisterRequest, UserOut

router = APIRouter(tags=["auth"])


def _auth_payload(result: service.AuthResult) -> Dict[str, Any]:
    return {
        "success": True,
        "data": {"user": UserOut.model_validate(result.user), "token": result.token},
    }


@router.post(
    "/register",
    response_model=Envelope[AuthData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    req: RegisterRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    result = await service.register(session, req.email, req.password, settings)
    return _auth_payload(result)


@router.post(
    "/login",
    response_model=Envelope[AuthData],
    summary="Login user",
)
async def login(
    req: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    result = await service.login(session, req.email, req.password, settings)
    return _auth_payload(result)
