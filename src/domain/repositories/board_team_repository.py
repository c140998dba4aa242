"""Board team repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.board_team import BoardTeam


class IBoardTeamRepository(Protocol):
    """Repository interface for BoardTeam entities."""

    async def get(self, id: UUID) -> BoardTeam | None:
        """Get a team by ID."""
        ...

    async def get_for_board(self, board_id: UUID) -> BoardTeam | None:
        """Get the team of a board."""
        ...

    async def create(self, team: BoardTeam) -> BoardTeam:
        """Create a new team."""
        ...

    async def add_member(self, team_id: UUID, user_id: UUID) -> BoardTeam:
        """Add a user to the team."""
        ...

    async def remove_member(self, team_id: UUID, user_id: UUID) -> bool:
        """Remove a user from the team."""
        ...
