"""Load the records an access decision needs, then evaluate the policy."""

from uuid import UUID

from core.exceptions import BoardNotFoundError, TaskNotFoundError, WorkspaceNotFoundError
from domain.entities.board import Board
from domain.entities.task import Task
from domain.entities.user import User
from domain.entities.workspace import Workspace, WorkspaceMember
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.access_policy import Capability, evaluate_access, require


async def load_workspace(
    uow: IUnitOfWork, workspace_id: UUID
) -> tuple[Workspace, list[WorkspaceMember]]:
    """Fetch a workspace and its members or raise WorkspaceNotFoundError."""
    workspace = await uow.workspaces.get(workspace_id)
    if not workspace:
        raise WorkspaceNotFoundError(str(workspace_id))
    members = await uow.workspaces.get_members(workspace_id)
    return workspace, members


async def authorize_workspace(
    uow: IUnitOfWork,
    user: User,
    workspace_id: UUID,
    needed: Capability,
) -> tuple[Workspace, list[WorkspaceMember]]:
    """Load a workspace and require ``needed`` on it."""
    workspace, members = await load_workspace(uow, workspace_id)
    require(evaluate_access(user, workspace, members), needed, workspace.id)
    return workspace, members


async def authorize_board(
    uow: IUnitOfWork,
    user: User,
    board_id: UUID,
    needed: Capability,
) -> tuple[Board, Workspace, list[WorkspaceMember]]:
    """Load a board with its workspace and require ``needed`` on it."""
    board = await uow.boards.get(board_id)
    if not board:
        raise BoardNotFoundError(str(board_id))
    workspace, members = await load_workspace(uow, board.workspace_id)
    require(evaluate_access(user, workspace, members, board=board), needed, workspace.id)
    return board, workspace, members


async def load_task(
    uow: IUnitOfWork, task_id: UUID
) -> tuple[Task, Board, Workspace, list[WorkspaceMember]]:
    """Fetch a task together with its board and workspace."""
    task = await uow.tasks.get(task_id)
    if not task:
        raise TaskNotFoundError(str(task_id))
    board = await uow.boards.get(task.board_id)
    if not board:
        raise BoardNotFoundError(str(task.board_id))
    workspace, members = await load_workspace(uow, board.workspace_id)
    return task, board, workspace, members


def workspace_member_ids(workspace: Workspace, members: list[WorkspaceMember]) -> set[UUID]:
    """IDs counted as workspace members (listed members plus the creator, if any)."""
    ids = {m.user_id for m in members}
    if workspace.created_by is not None:
        ids.add(workspace.created_by)
    return ids
