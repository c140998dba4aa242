"""Pydantic schemas for Board team API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TeamCreate(BaseModel):
    """Schema for creating a board team."""

    board_id: UUID


class TeamAddMemberRequest(BaseModel):
    """Schema for adding a user to a board team."""

    user_id: UUID


class TeamResponse(BaseModel):
    """Schema for Board team response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    board_id: UUID
    created_by: UUID | None
    members: list[UUID] = Field(default_factory=list)
    created_at: datetime


class TeamDetailResponse(BaseModel):
    """Schema for single Board team response."""

    data: TeamResponse
