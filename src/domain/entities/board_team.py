"""Board team domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class BoardTeam:
    """A roster of users collaborating on one board."""

    board_id: UUID
    created_by: UUID | None
    id: UUID = field(default_factory=uuid4)
    member_ids: list[UUID] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)

    def has_member(self, user_id: UUID) -> bool:
        """Check if the user is on the team."""
        return user_id in self.member_ids
