"""Board repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.board import Board


class IBoardRepository(Protocol):
    """Repository interface for Board entities."""

    async def get(self, id: UUID) -> Board | None:
        """Get a board by ID, members included."""
        ...

    async def get_for_workspace(self, workspace_id: UUID) -> list[Board]:
        """Get all boards of a workspace ordered by creation."""
        ...

    async def get_visible_to_user(self, user_id: UUID) -> list[Board]:
        """Get boards the user owns or is a member of, in workspaces they belong to."""
        ...

    async def create(self, board: Board) -> Board:
        """Create a new board."""
        ...

    async def update(self, board: Board) -> Board:
        """Update title, description and member list of a board."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a board (its tasks go with it)."""
        ...
