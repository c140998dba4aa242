"""Board service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from core.exceptions import AlreadyABoardMemberError, InvalidMembersError, UserNotFoundError
from domain.entities.board import Board
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_policy import Capability
from domain.services.authorization import (
    authorize_board,
    authorize_workspace,
    workspace_member_ids,
)
from infrastructure.email.sender import IEmailSender, deliver
from infrastructure.email.templates import board_invitation_email


@dataclass
class BoardInviteResult:
    """Outcome of adding a user to a board."""

    board: Board
    email_sent: bool


class BoardService:
    """Service layer for Board business logic."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        email_sender: IEmailSender,
        frontend_url: str,
    ) -> None:
        self._uow_factory = uow_factory
        self._email = email_sender
        self._frontend_url = frontend_url.rstrip("/")

    async def get_all_for_user(self, user: User) -> list[Board]:
        """Boards the user owns or belongs to, across their workspaces."""
        async with self._uow_factory() as uow:
            return await uow.boards.get_visible_to_user(user.id)  # type: ignore[no-any-return]

    async def get_for_workspace(self, workspace_id: UUID, user: User) -> list[Board]:
        """All boards of a workspace. Requires workspace membership."""
        async with self._uow_factory() as uow:
            await authorize_workspace(uow, user, workspace_id, Capability.VIEW_WORKSPACE)
            return await uow.boards.get_for_workspace(workspace_id)  # type: ignore[no-any-return]

    async def get_by_id(self, board_id: UUID, user: User) -> Board:
        """Get a board. Requires workspace membership."""
        async with self._uow_factory() as uow:
            board, _, _ = await authorize_board(uow, user, board_id, Capability.VIEW_BOARD)
            return board

    async def create(
        self,
        user: User,
        workspace_id: UUID,
        title: str,
        description: str | None = None,
    ) -> Board:
        """Create a board owned by the requester, who becomes its first member."""
        async with self._uow_factory() as uow:
            await authorize_workspace(uow, user, workspace_id, Capability.CREATE_BOARD)

            board = Board(
                title=title,
                description=description,
                workspace_id=workspace_id,
                owner_id=user.id,
                member_ids=[user.id],
            )
            created = await uow.boards.create(board)
            await uow.commit()
            return created

    async def update(
        self,
        board_id: UUID,
        user: User,
        title: str | None = None,
        description: str | None = None,
        member_ids: list[UUID] | None = None,
    ) -> Board:
        """Update a board. Requires board owner or workspace admin.

        A new member list must only contain workspace members. The board's
        workspace never changes.
        """
        async with self._uow_factory() as uow:
            board, workspace, members = await authorize_board(
                uow, user, board_id, Capability.MANAGE_BOARD
            )

            if member_ids is not None:
                allowed = workspace_member_ids(workspace, members)
                invalid = [str(uid) for uid in member_ids if uid not in allowed]
                if invalid:
                    raise InvalidMembersError(
                        "All board members must be workspace members", invalid
                    )
                board.member_ids = list(dict.fromkeys(member_ids))

            if title is not None:
                board.title = title
            if description is not None:
                board.description = description

            board.updated_at = datetime.utcnow()
            updated = await uow.boards.update(board)
            await uow.commit()
            return updated

    async def delete(self, board_id: UUID, user: User) -> None:
        """Delete a board and its tasks. Requires board owner or workspace admin."""
        async with self._uow_factory() as uow:
            await authorize_board(uow, user, board_id, Capability.MANAGE_BOARD)
            await uow.boards.delete(board_id)
            await uow.commit()

    async def invite(self, board_id: UUID, user: User, target_user_id: UUID) -> BoardInviteResult:
        """Add a workspace member to a board and email them.

        The membership change is committed before the email goes out, so a
        delivery failure only shows up as ``email_sent=False``.
        """
        async with self._uow_factory() as uow:
            board, workspace, members = await authorize_board(
                uow, user, board_id, Capability.INVITE_TO_BOARD
            )

            invitee = await uow.users.get(target_user_id)
            if not invitee:
                raise UserNotFoundError(str(target_user_id))
            if board.has_member(target_user_id):
                raise AlreadyABoardMemberError(str(target_user_id))
            if target_user_id not in workspace_member_ids(workspace, members):
                raise InvalidMembersError(
                    "User must be a member of the workspace", [str(target_user_id)]
                )

            board.member_ids.append(target_user_id)
            board.updated_at = datetime.utcnow()
            updated = await uow.boards.update(board)
            await uow.commit()

        message = board_invitation_email(
            to=invitee.email,
            user_name=invitee.name or "User",
            inviter_name=user.name or "Someone",
            board_title=updated.title,
            workspace_name=workspace.name,
            board_url=f"{self._frontend_url}/board/{updated.id}",
        )
        email_sent = await deliver(self._email, message)
        return BoardInviteResult(board=updated, email_sent=email_sent)

