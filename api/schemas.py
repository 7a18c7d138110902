"""
Pydantic request / response schemas for the HTTP surface.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from auth.password import BCRYPT_MAX_BYTES


def check_password_bytes(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"password must be at most {BCRYPT_MAX_BYTES} bytes")
    return value


# ── Users ──────────────────────────────────────────────────────────────


class UserInput(BaseModel):
    """
    Registration body.

    ``password`` and ``email`` are required in the ``credentials`` profile;
    the route enforces that, since the anonymous profile accepts a bare
    ``username``.
    """

    username: str = Field(..., min_length=1, max_length=64)
    password: Optional[str] = Field(None, min_length=1, max_length=BCRYPT_MAX_BYTES)
    email: Optional[EmailStr] = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: Optional[str]) -> Optional[str]:
        return check_password_bytes(value)


class SignInInput(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: Optional[str]) -> Optional[str]:
        return check_password_bytes(value)


class UserOut(BaseModel):
    """Public view of a user.  Never carries the password digest."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: Optional[str] = None


class UserResponse(BaseModel):
    user: UserOut
    token: Optional[str] = None


# ── Tasks ──────────────────────────────────────────────────────────────


class TaskInput(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    due_date: Optional[datetime] = None
    status: str = Field(..., min_length=1)

    @field_validator("due_date")
    @classmethod
    def _naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # The column is a plain TIMESTAMP; store aware values as naive UTC.
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TaskUpdate(TaskInput):
    """Full replacement of a task's mutable fields."""


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: str
    user_id: int
