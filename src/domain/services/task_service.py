"""Task service layer with business logic."""

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from core.exceptions import BoardNotFoundError, CrossWorkspaceMoveError, InvalidMembersError
from domain.entities.task import DEFAULT_TASK_STATUS, AttachmentUpload, Task
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceMember
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_policy import Capability, evaluate_access, require
from domain.services.authorization import authorize_board, load_task, workspace_member_ids
from infrastructure.storage.object_store import IObjectStore

logger = logging.getLogger(__name__)


class TaskService:
    """Service layer for Task business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        object_store: IObjectStore,
    ) -> None:
        self._uow_factory = uow_factory
        self._store = object_store

    async def get_for_board(self, board_id: UUID, user: User) -> list[Task]:
        """Tasks of a board ordered by position then creation."""
        async with self._uow_factory() as uow:
            await authorize_board(uow, user, board_id, Capability.VIEW_BOARD)
            return await uow.tasks.get_for_board(board_id)  # type: ignore[no-any-return]

    async def get_by_id(self, task_id: UUID, user: User) -> Task:
        """Get a task. Requires membership of the task's workspace."""
        async with self._uow_factory() as uow:
            task, board, workspace, members = await load_task(uow, task_id)
            require(
                evaluate_access(user, workspace, members, board=board, task=task),
                Capability.VIEW_BOARD,
                workspace.id,
            )
            return task

    async def create(
        self,
        user: User,
        board_id: UUID,
        title: str,
        description: str | None = None,
        status: str | None = None,
        assignee_ids: list[UUID] | None = None,
        attachment: AttachmentUpload | None = None,
    ) -> Task:
        """Create a task at the end of a board. Requires workspace membership."""
        async with self._uow_factory() as uow:
            board, workspace, members = await authorize_board(
                uow, user, board_id, Capability.CREATE_TASK
            )
            assignees = self._validate_assignees(assignee_ids or [], workspace, members)

            task = Task(
                title=title,
                description=description,
                status=status or DEFAULT_TASK_STATUS,
                board_id=board.id,
                created_by=user.id,
                assignee_ids=assignees,
                position=await uow.tasks.get_max_position(board.id) + 1,
            )
            if attachment is not None:
                task.attachment = await self._store_attachment(attachment)

            created = await uow.tasks.create(task)
            await uow.commit()
            return created

    async def update(
        self,
        task_id: UUID,
        user: User,
        title: str | None = None,
        description: str | None = None,
        status: str | None = None,
        assignee_ids: list[UUID] | None = None,
        board_id: UUID | None = None,
        attachment: AttachmentUpload | None = None,
    ) -> Task:
        """Update a task, possibly moving it to another board.

        A request whose only change is a different board needs nothing more
        than workspace membership. Anything else requires the task creator,
        an assignee or a workspace admin. Moves stay within one workspace.
        """
        async with self._uow_factory() as uow:
            task, board, workspace, members = await load_task(uow, task_id)
            caps = evaluate_access(user, workspace, members, board=board, task=task)

            moving = board_id is not None and board_id != task.board_id
            only_move = moving and all(
                value is None for value in (title, description, status, assignee_ids, attachment)
            )
            require(
                caps,
                Capability.MOVE_TASK if only_move else Capability.EDIT_TASK,
                workspace.id,
            )

            if moving:
                target = await uow.boards.get(board_id)
                if not target:
                    raise BoardNotFoundError(str(board_id))
                if target.workspace_id != workspace.id:
                    raise CrossWorkspaceMoveError()
                task.board_id = target.id
                task.position = await uow.tasks.get_max_position(target.id) + 1

            if assignee_ids is not None:
                task.assignee_ids = self._validate_assignees(assignee_ids, workspace, members)
            if title is not None:
                task.title = title
            if description is not None:
                task.description = description
            if status is not None:
                task.status = status
            if attachment is not None:
                task.attachment = await self._store_attachment(attachment)

            task.updated_at = datetime.utcnow()
            updated = await uow.tasks.update(task)
            await uow.commit()
            return updated

    async def update_status(self, task_id: UUID, user: User, status: str) -> Task:
        """Set a task's status. Any workspace member may do this."""
        async with self._uow_factory() as uow:
            task, board, workspace, members = await load_task(uow, task_id)
            require(
                evaluate_access(user, workspace, members, board=board, task=task),
                Capability.UPDATE_TASK_STATUS,
                workspace.id,
            )

            task.status = status
            task.updated_at = datetime.utcnow()
            updated = await uow.tasks.update(task)
            await uow.commit()
            return updated

    async def delete(self, task_id: UUID, user: User) -> None:
        """Delete a task. Requires the creator or a workspace admin."""
        async with self._uow_factory() as uow:
            task, board, workspace, members = await load_task(uow, task_id)
            require(
                evaluate_access(user, workspace, members, board=board, task=task),
                Capability.DELETE_TASK,
                workspace.id,
            )
            await uow.tasks.delete(task_id)
            await uow.commit()

    # --- Internal helpers ---

    @staticmethod
    def _validate_assignees(
        assignee_ids: list[UUID],
        workspace: Workspace,
        members: list[WorkspaceMember],
    ) -> list[UUID]:
        allowed = workspace_member_ids(workspace, members)
        invalid = [str(uid) for uid in assignee_ids if uid not in allowed]
        if invalid:
            raise InvalidMembersError("All assigned users must be workspace members", invalid)
        return list(dict.fromkeys(assignee_ids))

    async def _store_attachment(self, attachment: AttachmentUpload) -> str:
        url = await self._store.put(
            attachment.filename, attachment.content, attachment.content_type
        )
        logger.debug("Stored attachment %s at %s", attachment.filename, url)
        return url
