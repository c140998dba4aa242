"""Unit tests for BoardService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from core.exceptions import (
    AlreadyABoardMemberError,
    AuthorizationError,
    BoardNotFoundError,
    InvalidMembersError,
    NotAMemberError,
    UserNotFoundError,
)
from domain.entities.board import Board
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceMember, WorkspaceRole
from domain.services.board_service import BoardService
from tests.unit.conftest import FakeUnitOfWork, make_user, member_of


@pytest.fixture
def email_sender() -> AsyncMock:
    sender = AsyncMock()
    sender.send.return_value = True
    return sender


@pytest.fixture
def service(uow: FakeUnitOfWork, email_sender: AsyncMock) -> BoardService:
    return BoardService(lambda: uow, email_sender, "https://app.example.com")


@pytest.fixture
def board(workspace: Workspace, creator: User) -> Board:
    return Board(
        title="Roadmap",
        workspace_id=workspace.id,
        owner_id=creator.id,
        member_ids=[creator.id],
    )


def _load(
    uow: FakeUnitOfWork,
    workspace: Workspace,
    members: list[WorkspaceMember],
    board: Board | None = None,
) -> None:
    uow.workspaces.get.return_value = workspace
    uow.workspaces.get_members.return_value = members
    uow.boards.get.return_value = board
    uow.boards.update.side_effect = lambda b: b


# --- create ---


class TestCreate:
    @pytest.mark.asyncio
    async def test_owner_is_first_member(
        self, service: BoardService, uow: FakeUnitOfWork, workspace: Workspace, user: User
    ):
        _load(uow, workspace, [member_of(workspace, user)])
        uow.boards.create.side_effect = lambda b: b

        board = await service.create(user, workspace.id, "Sprint", None)

        assert board.owner_id == user.id
        assert board.member_ids == [user.id]
        assert board.workspace_id == workspace.id
        assert uow.committed

    @pytest.mark.asyncio
    async def test_outsider_cannot_create(
        self, service: BoardService, uow: FakeUnitOfWork, workspace: Workspace, user: User
    ):
        _load(uow, workspace, [])

        with pytest.raises(NotAMemberError):
            await service.create(user, workspace.id, "Sprint")


# --- update ---


class TestUpdate:
    @pytest.mark.asyncio
    async def test_non_owner_member_is_forbidden(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        board: Board,
        user: User,
    ):
        _load(uow, workspace, [member_of(workspace, user)], board)

        with pytest.raises(AuthorizationError):
            await service.update(board.id, user, title="Hijacked")

    @pytest.mark.asyncio
    async def test_workspace_admin_updates(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        board: Board,
        user: User,
    ):
        _load(uow, workspace, [member_of(workspace, user, WorkspaceRole.ADMIN)], board)

        updated = await service.update(board.id, user, title="Q3", member_ids=[user.id, user.id])

        assert updated.title == "Q3"
        assert updated.member_ids == [user.id]
        assert updated.workspace_id == workspace.id

    @pytest.mark.asyncio
    async def test_members_must_belong_to_workspace(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        stranger = uuid4()
        _load(uow, workspace, [], board)

        with pytest.raises(InvalidMembersError) as exc_info:
            await service.update(board.id, creator, member_ids=[creator.id, stranger])

        assert exc_info.value.details == {"user_ids": [str(stranger)]}
        uow.boards.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_board(self, service: BoardService, uow: FakeUnitOfWork, user: User):
        uow.boards.get.return_value = None

        with pytest.raises(BoardNotFoundError):
            await service.update(uuid4(), user, title="x")


# --- invite ---


class TestInvite:
    @pytest.mark.asyncio
    async def test_adds_member_and_emails(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        email_sender: AsyncMock,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        bob = make_user(name="Bob", email="bob@example.com")
        _load(uow, workspace, [member_of(workspace, bob)], board)
        uow.users.get.return_value = bob

        result = await service.invite(board.id, creator, bob.id)

        assert bob.id in result.board.member_ids
        assert result.email_sent is True
        message = email_sender.send.call_args.args[0]
        assert message.to == "bob@example.com"
        assert f"https://app.example.com/board/{board.id}" in message.text_body

    @pytest.mark.asyncio
    async def test_email_failure_still_adds_member(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        email_sender: AsyncMock,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        bob = make_user(name="Bob")
        _load(uow, workspace, [member_of(workspace, bob)], board)
        uow.users.get.return_value = bob
        email_sender.send.return_value = False

        result = await service.invite(board.id, creator, bob.id)

        assert result.email_sent is False
        assert bob.id in result.board.member_ids
        assert uow.committed

    @pytest.mark.asyncio
    async def test_unknown_user(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        _load(uow, workspace, [], board)
        uow.users.get.return_value = None

        with pytest.raises(UserNotFoundError):
            await service.invite(board.id, creator, uuid4())

    @pytest.mark.asyncio
    async def test_already_on_board(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        _load(uow, workspace, [], board)
        uow.users.get.return_value = creator

        with pytest.raises(AlreadyABoardMemberError):
            await service.invite(board.id, creator, creator.id)

    @pytest.mark.asyncio
    async def test_invitee_must_be_workspace_member(
        self,
        service: BoardService,
        uow: FakeUnitOfWork,
        email_sender: AsyncMock,
        workspace: Workspace,
        board: Board,
        creator: User,
    ):
        outsider = make_user(name="Eve")
        _load(uow, workspace, [], board)
        uow.users.get.return_value = outsider

        with pytest.raises(InvalidMembersError):
            await service.invite(board.id, creator, outsider.id)

        email_sender.send.assert_not_called()
