"""Pydantic schemas for Board API."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class BoardCreate(BaseModel):
    """Schema for creating a Board."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    workspace_id: UUID


class BoardUpdate(BaseModel):
    """Schema for updating a Board. The workspace cannot be changed."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    members: list[UUID] | None = None


class BoardInviteRequest(BaseModel):
    """Schema for adding a workspace member to a board."""

    user_id: UUID


class BoardResponse(BaseModel):
    """Schema for Board response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Sprint 12",
                "description": None,
                "workspace_id": "456e4567-e89b-12d3-a456-426614174000",
                "owner_id": "789e4567-e89b-12d3-a456-426614174000",
                "members": ["789e4567-e89b-12d3-a456-426614174000"],
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    title: str
    description: str | None
    workspace_id: UUID
    owner_id: UUID | None
    members: list[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BoardListResponse(BaseModel):
    """Schema for list of Boards response."""

    data: list[BoardResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class BoardDetailResponse(BaseModel):
    """Schema for single Board response."""

    data: BoardResponse


class BoardInviteResponse(BaseModel):
    """Schema for the board invitation response."""

    message: str = "Invitation sent successfully"
    email_sent: bool
    data: BoardResponse
