"""
Pydantic schemas for the Taskboard API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72


# ═══════════════════════════════════════════════════════════════════════════════
# Auth — Input
# ═══════════════════════════════════════════════════════════════════════════════


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        # bcrypt refuses input longer than 72 bytes, not characters.
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


# ═══════════════════════════════════════════════════════════════════════════════
# Tasks — Input
# ═══════════════════════════════════════════════════════════════════════════════


class TaskCreate(BaseModel):
    """Body of ``POST /tasks``.  Any owner field in the body is ignored."""

    title: str = Field(..., max_length=255)
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value


class TaskUpdate(BaseModel):
    """
    Partial update.  Only fields present in the request body are applied;
    ``description`` may be explicitly cleared with ``null``.
    """

    title: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: Optional[str]) -> str:
        if value is None or not value.strip():
            raise ValueError("title must not be empty")
        return value

    @field_validator("completed")
    @classmethod
    def _completed_not_null(cls, value: Optional[bool]) -> bool:
        if value is None:
            raise ValueError("completed must be a boolean")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# ═══════════════════════════════════════════════════════════════════════════════
# Output — public views (camelCase on the wire)
# ═══════════════════════════════════════════════════════════════════════════════


class _PublicModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class UserOut(_PublicModel):
    id: int
    email: str
    created_at: datetime
    updated_at: datetime


class TaskOut(_PublicModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    user_id: int
    created_at: datetime
    updated_at: datetime


class ProfileTaskOut(_PublicModel):
    id: int
    title: str
    description: Optional[str] = None
    completed: bool
    created_at: datetime
    updated_at: datetime


class ProfileOut(UserOut):
    tasks: List[ProfileTaskOut] = Field(default_factory=list)


class AuthData(BaseModel):
    user: UserOut
    token: str


class MessageOut(BaseModel):
    message: str


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T
