"""Pydantic schemas for User and session API."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    role: Literal["user", "admin"] | None = None


class LoginRequest(BaseModel):
    """Schema for logging in."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Schema for updating a user (admin only, all fields optional)."""

    name: str | None = Field(None, min_length=1, max_length=255)
    email: str | None = Field(None, min_length=3, max_length=255)
    role: Literal["user", "admin"] | None = None


class UserResponse(BaseModel):
    """Schema for User response. Never carries the password hash."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "Ada Lovelace",
                "email": "ada@example.com",
                "role": "user",
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    name: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class AuthResponse(BaseModel):
    """Schema returned by register and login."""

    token: str
    user: UserResponse


class UserDetailResponse(BaseModel):
    """Schema for single User response."""

    data: UserResponse


class TeamMemberResponse(BaseModel):
    """A linked invitee on the requester's team."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str
    role: str
    status: str
    invited_at: datetime
    accepted_at: datetime | None = None


class TeamMemberListResponse(BaseModel):
    """Schema for list of team members response."""

    data: list[TeamMemberResponse]
    meta: dict[str, Any] = Field(default_factory=dict)
