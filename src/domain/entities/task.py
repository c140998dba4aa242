"""Task domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

DEFAULT_TASK_STATUS = "todo"


@dataclass
class Task:
    """Domain entity for a task card on a board.

    ``status`` is a free-form column name; only its default is fixed.
    """

    title: str
    board_id: UUID
    created_by: UUID | None
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    status: str = DEFAULT_TASK_STATUS
    assignee_ids: list[UUID] = field(default_factory=list)
    attachment: str | None = None
    position: int = 0
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def is_assigned_to(self, user_id: UUID) -> bool:
        """Check if the user is one of the task's assignees."""
        return user_id in self.assignee_ids

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at


@dataclass(frozen=True)
class AttachmentUpload:
    """A file received with a task form, not yet stored."""

    filename: str
    content: bytes
    content_type: str | None = None
