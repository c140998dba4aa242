"""Task repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.task import Task


class ITaskRepository(Protocol):
    """Repository interface for Task entities."""

    async def get(self, id: UUID) -> Task | None:
        """Get a task by ID, assignees included."""
        ...

    async def get_for_board(self, board_id: UUID) -> list[Task]:
        """Get all tasks on a board ordered by position then creation."""
        ...

    async def get_max_position(self, board_id: UUID) -> int:
        """Get the highest position on a board, -1 when empty."""
        ...

    async def create(self, task: Task) -> Task:
        """Create a new task."""
        ...

    async def update(self, task: Task) -> Task:
        """Update an existing task."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a task."""
        ...
