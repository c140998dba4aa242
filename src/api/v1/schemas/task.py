"""Pydantic schemas for Task API.

Create and update arrive as multipart forms (they may carry an attachment),
so only the JSON bodies and responses are modelled here.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TaskStatusUpdate(BaseModel):
    """Schema for changing a task's status."""

    status: str = Field(..., min_length=1, max_length=50)


class TaskResponse(BaseModel):
    """Schema for Task response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "title": "Write release notes",
                "description": None,
                "status": "todo",
                "board_id": "456e4567-e89b-12d3-a456-426614174000",
                "assigned_to": [],
                "created_by": "789e4567-e89b-12d3-a456-426614174000",
                "attachment": "/uploads/3f2a-notes.pdf",
                "position": 0,
                "created_at": "2026-02-01T10:00:00",
                "updated_at": "2026-02-01T10:00:00",
            }
        },
    )

    id: UUID
    title: str
    description: str | None
    status: str
    board_id: UUID
    assigned_to: list[UUID] = Field(default_factory=list)
    created_by: UUID | None
    attachment: str | None = None
    position: int
    created_at: datetime
    updated_at: datetime


class TaskListResponse(BaseModel):
    """Schema for list of Tasks response."""

    data: list[TaskResponse]
    meta: dict[str, Any] = Field(default_factory=dict)


class TaskDetailResponse(BaseModel):
    """Schema for single Task response."""

    data: TaskResponse
