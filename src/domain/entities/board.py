"""Board domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class Board:
    """Domain entity for a Kanban board.

    ``workspace_id`` is fixed at creation. ``member_ids`` is expected to be a
    subset of the workspace members; this is checked when the list changes,
    not when the workspace membership changes later.
    """

    title: str
    workspace_id: UUID
    owner_id: UUID | None
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    member_ids: list[UUID] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def has_member(self, user_id: UUID) -> bool:
        """Check if the user is listed as a board member."""
        return user_id in self.member_ids

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at
