"""Unit tests for the access policy."""

from uuid import uuid4

import pytest

from core.exceptions import AuthorizationError, NotAMemberError
from domain.entities.board import Board
from domain.entities.task import Task
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceRole
from domain.services.access_policy import (
    Capability,
    evaluate_access,
    require,
    resolve_workspace_role,
)
from domain.services.authorization import workspace_member_ids
from tests.unit.conftest import member_of

MEMBER_DEFAULTS = {
    Capability.VIEW_WORKSPACE,
    Capability.CREATE_BOARD,
    Capability.VIEW_BOARD,
    Capability.INVITE_TO_BOARD,
    Capability.CREATE_TASK,
    Capability.UPDATE_TASK_STATUS,
    Capability.MOVE_TASK,
}


@pytest.fixture
def board(workspace: Workspace, creator: User) -> Board:
    return Board(title="Roadmap", workspace_id=workspace.id, owner_id=creator.id)


class TestResolveWorkspaceRole:
    def test_creator_is_admin_even_when_unlisted(self, workspace: Workspace, creator: User):
        assert resolve_workspace_role(creator.id, workspace, []) == WorkspaceRole.ADMIN

    def test_creator_listed_as_member_is_still_admin(self, workspace: Workspace, creator: User):
        members = [member_of(workspace, creator, WorkspaceRole.MEMBER)]

        assert resolve_workspace_role(creator.id, workspace, members) == WorkspaceRole.ADMIN

    def test_listed_role_is_used(self, workspace: Workspace, user: User):
        members = [member_of(workspace, user, WorkspaceRole.MEMBER)]

        assert resolve_workspace_role(user.id, workspace, members) == WorkspaceRole.MEMBER

    def test_outsider_has_no_role(self, workspace: Workspace, user: User):
        assert resolve_workspace_role(user.id, workspace, []) is None

    def test_orphaned_workspace_keeps_listed_roles(self, workspace: Workspace, user: User):
        workspace.created_by = None
        members = [member_of(workspace, user, WorkspaceRole.ADMIN)]

        assert resolve_workspace_role(user.id, workspace, members) == WorkspaceRole.ADMIN


class TestWorkspaceMemberIds:
    def test_includes_unlisted_creator(self, workspace: Workspace, creator: User, user: User):
        members = [member_of(workspace, user, WorkspaceRole.MEMBER)]

        assert workspace_member_ids(workspace, members) == {creator.id, user.id}

    def test_deleted_creator_is_not_counted(self, workspace: Workspace, user: User):
        workspace.created_by = None
        members = [member_of(workspace, user, WorkspaceRole.MEMBER)]

        assert workspace_member_ids(workspace, members) == {user.id}


class TestEvaluateAccess:
    def test_outsider_gets_nothing(self, workspace: Workspace, user: User):
        assert evaluate_access(user, workspace, []) == frozenset()

    def test_global_admin_gets_everything_without_membership(
        self, workspace: Workspace, admin: User
    ):
        assert evaluate_access(admin, workspace, []) == frozenset(Capability)

    def test_plain_member_gets_defaults(self, workspace: Workspace, user: User, board: Board):
        members = [member_of(workspace, user)]

        caps = evaluate_access(user, workspace, members, board=board)

        assert caps == MEMBER_DEFAULTS

    def test_workspace_admin_manages_but_cannot_delete(
        self, workspace: Workspace, user: User, board: Board
    ):
        members = [member_of(workspace, user, WorkspaceRole.ADMIN)]

        caps = evaluate_access(user, workspace, members, board=board)

        assert Capability.MANAGE_WORKSPACE in caps
        assert Capability.MANAGE_BOARD in caps
        assert Capability.DELETE_WORKSPACE not in caps

    def test_creator_can_delete_workspace(self, workspace: Workspace, creator: User):
        caps = evaluate_access(creator, workspace, [])

        assert Capability.DELETE_WORKSPACE in caps
        assert Capability.MANAGE_WORKSPACE in caps

    def test_board_owner_manages_own_board(self, workspace: Workspace, user: User):
        members = [member_of(workspace, user)]
        own = Board(title="Mine", workspace_id=workspace.id, owner_id=user.id)

        assert Capability.MANAGE_BOARD in evaluate_access(user, workspace, members, board=own)

    def test_task_assignee_edits_but_cannot_delete(
        self, workspace: Workspace, user: User, board: Board
    ):
        members = [member_of(workspace, user)]
        task = Task(title="T", board_id=board.id, created_by=uuid4(), assignee_ids=[user.id])

        caps = evaluate_access(user, workspace, members, board=board, task=task)

        assert Capability.EDIT_TASK in caps
        assert Capability.DELETE_TASK not in caps

    def test_task_creator_edits_and_deletes(self, workspace: Workspace, user: User, board: Board):
        members = [member_of(workspace, user)]
        task = Task(title="T", board_id=board.id, created_by=user.id)

        caps = evaluate_access(user, workspace, members, board=board, task=task)

        assert {Capability.EDIT_TASK, Capability.DELETE_TASK} <= caps

    def test_unrelated_member_may_only_move_or_restatus(
        self, workspace: Workspace, user: User, board: Board
    ):
        members = [member_of(workspace, user)]
        task = Task(title="T", board_id=board.id, created_by=uuid4())

        caps = evaluate_access(user, workspace, members, board=board, task=task)

        assert Capability.MOVE_TASK in caps
        assert Capability.UPDATE_TASK_STATUS in caps
        assert Capability.EDIT_TASK not in caps


class TestRequire:
    def test_passes_when_granted(self, workspace: Workspace):
        require(frozenset({Capability.VIEW_WORKSPACE}), Capability.VIEW_WORKSPACE, workspace.id)

    def test_non_member_raises_not_a_member(self, workspace: Workspace):
        with pytest.raises(NotAMemberError):
            require(frozenset(), Capability.VIEW_BOARD, workspace.id)

    def test_member_lacking_capability_raises_forbidden(self, workspace: Workspace):
        with pytest.raises(AuthorizationError):
            require(frozenset(MEMBER_DEFAULTS), Capability.MANAGE_BOARD, workspace.id)
