"""Access policy for workspaces, boards and tasks.

Every board and task operation evaluates the policy against freshly loaded
records. The policy itself is pure: it never touches the database.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID

from core.exceptions import AuthorizationError, NotAMemberError
from domain.entities.board import Board
from domain.entities.task import Task
from domain.entities.user import User
from domain.entities.workspace import (
    Workspace,
    WorkspaceMember,
    WorkspaceRole,
    has_permission,
)


class Capability(StrEnum):
    """Actions a user may be allowed to perform."""

    VIEW_WORKSPACE = "view_workspace"
    MANAGE_WORKSPACE = "manage_workspace"
    DELETE_WORKSPACE = "delete_workspace"
    CREATE_BOARD = "create_board"
    VIEW_BOARD = "view_board"
    MANAGE_BOARD = "manage_board"
    INVITE_TO_BOARD = "invite_to_board"
    CREATE_TASK = "create_task"
    EDIT_TASK = "edit_task"
    UPDATE_TASK_STATUS = "update_task_status"
    MOVE_TASK = "move_task"
    DELETE_TASK = "delete_task"


# Granted to anyone who can see the workspace at all
_MEMBER_CAPABILITIES = frozenset(
    {
        Capability.VIEW_WORKSPACE,
        Capability.CREATE_BOARD,
        Capability.VIEW_BOARD,
        Capability.INVITE_TO_BOARD,
        Capability.CREATE_TASK,
        Capability.UPDATE_TASK_STATUS,
        Capability.MOVE_TASK,
    }
)


@dataclass(frozen=True)
class AccessContext:
    """Facts about one user's relationship to a workspace (and board/task)."""

    is_global_admin: bool
    is_member: bool
    is_workspace_admin: bool
    is_workspace_creator: bool
    is_board_owner: bool = False
    is_task_creator: bool = False
    is_task_assignee: bool = False


def resolve_workspace_role(
    user_id: UUID,
    workspace: Workspace,
    members: Iterable[WorkspaceMember],
) -> WorkspaceRole | None:
    """Return the user's effective role in the workspace, or None.

    The creator counts as an admin even when not listed, or listed with a
    lower role.
    """
    if workspace.created_by == user_id:
        return WorkspaceRole.ADMIN
    for member in members:
        if member.user_id == user_id:
            return member.role
    return None


def build_context(
    user: User,
    workspace: Workspace,
    members: Iterable[WorkspaceMember],
    board: Board | None = None,
    task: Task | None = None,
) -> AccessContext:
    """Collect the booleans the capability rules are written against."""
    role = resolve_workspace_role(user.id, workspace, members)
    return AccessContext(
        is_global_admin=user.is_admin,
        is_member=role is not None,
        is_workspace_admin=role is not None and has_permission(role, WorkspaceRole.ADMIN),
        is_workspace_creator=workspace.created_by == user.id,
        is_board_owner=board is not None and board.owner_id == user.id,
        is_task_creator=task is not None and task.created_by == user.id,
        is_task_assignee=task is not None and task.is_assigned_to(user.id),
    )


def capabilities_for(ctx: AccessContext) -> frozenset[Capability]:
    """Map an access context to the set of granted capabilities."""
    if ctx.is_global_admin:
        return frozenset(Capability)
    if not ctx.is_member:
        return frozenset()

    granted = set(_MEMBER_CAPABILITIES)
    if ctx.is_workspace_admin:
        granted.add(Capability.MANAGE_WORKSPACE)
    if ctx.is_workspace_creator:
        granted.add(Capability.DELETE_WORKSPACE)
    if ctx.is_board_owner or ctx.is_workspace_admin:
        granted.add(Capability.MANAGE_BOARD)
    if ctx.is_task_creator or ctx.is_task_assignee or ctx.is_workspace_admin:
        granted.add(Capability.EDIT_TASK)
    if ctx.is_task_creator or ctx.is_workspace_admin:
        granted.add(Capability.DELETE_TASK)
    return frozenset(granted)


def evaluate_access(
    user: User,
    workspace: Workspace,
    members: Iterable[WorkspaceMember],
    board: Board | None = None,
    task: Task | None = None,
) -> frozenset[Capability]:
    """Return every capability ``user`` holds on the given resources."""
    return capabilities_for(build_context(user, workspace, members, board, task))


def require(
    capabilities: frozenset[Capability],
    needed: Capability,
    workspace_id: UUID,
) -> None:
    """Raise unless ``needed`` is granted.

    A user with no capabilities at all is reported as a non-member, any other
    denial as a plain authorization failure.
    """
    if needed in capabilities:
        return
    if Capability.VIEW_WORKSPACE not in capabilities:
        raise NotAMemberError(str(workspace_id))
    raise AuthorizationError()
